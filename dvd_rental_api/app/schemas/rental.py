"""
Pydantic models for the rental workflow.

Requests carry plain integer identifiers; responses echo the
identifier of the rental that was created, returned or canceled.
"""

from typing import List

from pydantic import BaseModel, Field

from dvd_rental_api.app.core.db import MAX_SQLITE_INTEGER


class RentRequest(BaseModel):
    customer_id: int = Field(..., le=MAX_SQLITE_INTEGER, example=1)
    inventory_id: int = Field(..., le=MAX_SQLITE_INTEGER, example=367)
    staff_id: int = Field(..., le=MAX_SQLITE_INTEGER, example=1)


class RentResponse(BaseModel):
    rental_id: int


class ReturnResponse(BaseModel):
    returned: int


class CancelResponse(BaseModel):
    canceled: int


class AvailableInventory(BaseModel):
    """Inventory identifiers of a film that are not checked out."""

    inventory_ids: List[int] = Field(default_factory=list)
