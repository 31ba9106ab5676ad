"""
Pydantic models for the reporting endpoints.

All reports are read-only projections; the models mirror the columns
selected by ``ReportingService``.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CustomerRental(BaseModel):
    rental_id: int
    rental_date: datetime
    return_date: Optional[datetime] = None
    title: str
    inventory_id: int


class OutstandingRental(BaseModel):
    rental_id: int
    customer: str
    title: str
    rental_date: datetime
    inventory_id: int


class TopRentedFilm(BaseModel):
    title: str
    total: int


class StaffRevenue(BaseModel):
    staff_id: int
    staff: str
    revenue: float
