"""
Pydantic models for the login endpoint.

Login is an identity lookup: the client names a role and an e-mail
address and receives a label identifying the matching staff member or
customer.  No password is involved.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., example="mary.smith@sakilacustomer.org")
    # Validated by the service so that an unknown role is reported the
    # same way whether it arrives over HTTP or from a direct call.
    role: str = Field(..., example="customer", description="Either 'staff' or 'customer'")


class LoginResponse(BaseModel):
    token: str = Field(..., example="customer-1")
    role: str
    id: int
    name: str
