"""
Reporting endpoints.

Read-only views over rentals and payments: a customer's history, the
items still out, the most rented films and the revenue taken by each
staff member.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Query

from dvd_rental_api.app.api.deps import get_reporting_service
from dvd_rental_api.app.core.db import MAX_SQLITE_INTEGER
from dvd_rental_api.app.schemas.report import (
    CustomerRental,
    OutstandingRental,
    StaffRevenue,
    TopRentedFilm,
)
from dvd_rental_api.app.services.reporting_service import DEFAULT_TOP_LIMIT, ReportingService


router = APIRouter()


@router.get("/customer/{customer_id}/rentals", response_model=List[CustomerRental])
def customer_rentals(
    customer_id: int = Path(..., le=MAX_SQLITE_INTEGER, description="ID of the customer"),
    service: ReportingService = Depends(get_reporting_service),
) -> List[CustomerRental]:
    """All rentals of a customer, most recent first."""
    return service.customer_rentals(customer_id)


@router.get("/not-returned", response_model=List[OutstandingRental])
def not_returned(
    service: ReportingService = Depends(get_reporting_service),
) -> List[OutstandingRental]:
    """Rentals that are still out, oldest first."""
    return service.not_returned()


@router.get("/top-rented", response_model=List[TopRentedFilm])
def top_rented(
    limit: int = Query(DEFAULT_TOP_LIMIT, le=MAX_SQLITE_INTEGER, description="Number of films to return"),
    service: ReportingService = Depends(get_reporting_service),
) -> List[TopRentedFilm]:
    return service.top_rented(limit)


@router.get("/revenue-by-staff", response_model=List[StaffRevenue])
def revenue_by_staff(
    service: ReportingService = Depends(get_reporting_service),
) -> List[StaffRevenue]:
    return service.revenue_by_staff()
