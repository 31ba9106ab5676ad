"""
Dependency providers for route handlers.

Services are cheap objects built per request around the application's
``Database`` handle.
"""

from fastapi import Depends

from dvd_rental_api.app.core.db import Database, get_db
from dvd_rental_api.app.services.identity_service import IdentityService
from dvd_rental_api.app.services.rental_service import RentalService
from dvd_rental_api.app.services.reporting_service import ReportingService


def get_identity_service(db: Database = Depends(get_db)) -> IdentityService:
    return IdentityService(db)


def get_rental_service(db: Database = Depends(get_db)) -> RentalService:
    return RentalService(db)


def get_reporting_service(db: Database = Depends(get_db)) -> ReportingService:
    return ReportingService(db)
