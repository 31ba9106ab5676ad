"""
Error kinds raised by the service layer.

Each class carries the HTTP status the API responds with.  Handlers
registered in ``main`` render every one of them as ``{"error": ...}``.
"""

from fastapi import status


class RentalApiError(Exception):
    """Base error for service-layer failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR


class InvalidInput(RentalApiError):
    """Raised for malformed or missing request data."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotAuthorized(RentalApiError):
    """Raised when an identity lookup finds nobody."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFound(RentalApiError):
    """Raised when the target entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class Conflict(RentalApiError):
    """Raised when a rental state transition is not allowed."""

    status_code = status.HTTP_409_CONFLICT


class StoreUnavailable(RentalApiError):
    """Raised when the underlying database call fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
