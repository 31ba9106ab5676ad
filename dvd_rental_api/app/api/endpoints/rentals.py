"""
Rental workflow endpoints.

These routes open, return and cancel rentals and list the copies of a
film that can be rented right now.  The state rules live in
``RentalService``; rejected transitions surface as 404 or 409 through
the application's error handlers.
"""

from fastapi import APIRouter, Depends, Path, Query, status

from dvd_rental_api.app.api.deps import get_rental_service
from dvd_rental_api.app.core.db import MAX_SQLITE_INTEGER
from dvd_rental_api.app.schemas.rental import (
    AvailableInventory,
    CancelResponse,
    RentRequest,
    RentResponse,
    ReturnResponse,
)
from dvd_rental_api.app.services.rental_service import DEFAULT_AVAILABLE_LIMIT, RentalService


router = APIRouter()


@router.post(
    "/rentals",
    response_model=RentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_rental(
    rental: RentRequest,
    service: RentalService = Depends(get_rental_service),
) -> RentResponse:
    """Rent an inventory item to a customer.

    Returns 409 if the item is already checked out.
    """
    return service.rent(rental.customer_id, rental.inventory_id, rental.staff_id)


@router.post("/returns/{rental_id}", response_model=ReturnResponse)
def return_rental(
    rental_id: int = Path(..., le=MAX_SQLITE_INTEGER, description="ID of the rental to return"),
    service: RentalService = Depends(get_rental_service),
) -> ReturnResponse:
    """Record the return of an open rental.

    Returns 404 if the rental does not exist or was already returned.
    """
    return service.return_rental(rental_id)


@router.post("/rentals/{rental_id}/cancel", response_model=CancelResponse)
def cancel_rental(
    rental_id: int = Path(..., le=MAX_SQLITE_INTEGER, description="ID of the rental to cancel"),
    service: RentalService = Depends(get_rental_service),
) -> CancelResponse:
    """Cancel an open rental, deleting it.

    Returns 409 if the rental was already returned or does not exist.
    """
    return service.cancel(rental_id)


@router.get("/inventory/available", response_model=AvailableInventory)
def available_inventory(
    film_id: int = Query(..., le=MAX_SQLITE_INTEGER, description="ID of the film"),
    limit: int = Query(
        DEFAULT_AVAILABLE_LIMIT,
        le=MAX_SQLITE_INTEGER,
        description="Maximum number of copies to list",
    ),
    service: RentalService = Depends(get_rental_service),
) -> AvailableInventory:
    """List copies of a film that have no open rental."""
    return service.find_available_inventory(film_id, limit=limit)
