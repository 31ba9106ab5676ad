"""
Top-level router for the ``/api`` prefix.

This router aggregates the area routers.  Paths are kept exactly as
existing clients call them, so the rental router carries its own
``/rentals``, ``/returns`` and ``/inventory`` prefixes.
"""

from fastapi import APIRouter

from .endpoints import auth, rentals, reports

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(rentals.router, tags=["rentals"])
router.include_router(reports.router, prefix="/reports", tags=["reports"])
