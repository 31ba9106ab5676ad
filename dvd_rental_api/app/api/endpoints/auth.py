"""
Login endpoint.

Resolves an e-mail address to a staff member or customer and returns
the ``<role>-<id>`` label together with the person's display name.
"""

from fastapi import APIRouter, Depends

from dvd_rental_api.app.api.deps import get_identity_service
from dvd_rental_api.app.schemas.auth import LoginRequest, LoginResponse
from dvd_rental_api.app.services.identity_service import IdentityService


router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    service: IdentityService = Depends(get_identity_service),
) -> LoginResponse:
    """Look up a staff member or customer by e-mail.

    Returns 400 for a role other than ``staff`` or ``customer`` and 401
    when nobody in that role has the given address.
    """
    return service.check_identity(credentials.email, credentials.role)
