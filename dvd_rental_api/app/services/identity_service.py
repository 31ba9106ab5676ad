"""
Identity lookup for staff members and customers.

``IdentityService.check_identity`` answers "who is this e-mail address
in this role?".  There is no password check and no expiring or signed
token: the returned token is the label ``<role>-<id>``, which clients
use to remember who logged in.
"""

import logging

from dvd_rental_api.app.core.db import Database
from dvd_rental_api.app.core.errors import InvalidInput, NotAuthorized
from dvd_rental_api.app.schemas.auth import LoginResponse


logger = logging.getLogger(__name__)

# Role name -> (table, primary key column)
ROLE_TABLES = {
    "staff": ("staff", "staff_id"),
    "customer": ("customer", "customer_id"),
}


class IdentityService:
    """Service resolving an e-mail address to a staff member or customer."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def check_identity(self, email: str, role: str) -> LoginResponse:
        """Look up ``email`` among the entities of ``role``.

        Raises ``InvalidInput`` for a role other than ``staff`` or
        ``customer`` without touching the store, and ``NotAuthorized``
        when no entity has that e-mail address (compared case
        insensitively).
        """
        if role not in ROLE_TABLES:
            raise InvalidInput("role must be 'staff' or 'customer'")
        table, key = ROLE_TABLES[role]
        with self.db.transaction() as cursor:
            row = cursor.execute(
                f"SELECT {key} AS id, first_name || ' ' || last_name AS name "
                f"FROM {table} WHERE lower(email) = lower(?)",
                (email,),
            ).fetchone()
        if not row:
            logger.info("Login rejected: no %s with email %s", role, email)
            raise NotAuthorized(f"{role} not found")
        return LoginResponse(
            token=f"{role}-{row['id']}",
            role=role,
            id=row["id"],
            name=row["name"],
        )
