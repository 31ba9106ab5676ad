"""
Business logic for renting, returning and canceling inventory.

A rental is *open* while its ``return_date`` is NULL.  Open rentals
move to exactly one terminal state: *returned* (``return_date`` set)
or *canceled* (row deleted).  An inventory item may have at most one
open rental.  That rule is enforced by the store itself, through the
partial unique index ``ux_rental_open_inventory``, and by taking the
write lock before the availability check so that concurrent workers
queue up instead of racing.
"""

import logging
import sqlite3
from datetime import datetime, timezone

from dvd_rental_api.app.core.db import Database
from dvd_rental_api.app.core.errors import Conflict, InvalidInput, NotFound
from dvd_rental_api.app.schemas.rental import (
    AvailableInventory,
    CancelResponse,
    RentResponse,
    ReturnResponse,
)


logger = logging.getLogger(__name__)

DEFAULT_AVAILABLE_LIMIT = 10


def utcnow() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class RentalService:
    """Service applying the rental state transitions."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def rent(self, customer_id: int, inventory_id: int, staff_id: int) -> RentResponse:
        """Open a new rental of ``inventory_id`` for a customer.

        Fails with ``Conflict`` when the item already has an open
        rental and with ``InvalidInput`` when the customer, inventory
        item or staff member does not exist.
        """
        with self.db.transaction() as cursor:
            # Serialise writers: a second rent of the same item waits
            # here until the first one commits, then sees its row.
            cursor.execute("BEGIN IMMEDIATE")
            open_count = cursor.execute(
                "SELECT COUNT(*) FROM rental WHERE inventory_id = ? AND return_date IS NULL",
                (inventory_id,),
            ).fetchone()[0]
            if open_count > 0:
                logger.warning("Inventory %s is already rented", inventory_id)
                raise Conflict("inventory already rented")
            try:
                cursor.execute(
                    """
                    INSERT INTO rental (rental_date, inventory_id, customer_id, staff_id)
                    VALUES (?, ?, ?, ?)
                    """,
                    (utcnow(), inventory_id, customer_id, staff_id),
                )
            except sqlite3.IntegrityError as exc:
                if "UNIQUE" in str(exc):
                    logger.warning("Inventory %s is already rented", inventory_id)
                    raise Conflict("inventory already rented") from exc
                raise InvalidInput(f"cannot rent: {exc}") from exc
            rental_id = cursor.lastrowid
        logger.info(
            "Rental %s opened: inventory %s, customer %s, staff %s",
            rental_id,
            inventory_id,
            customer_id,
            staff_id,
        )
        return RentResponse(rental_id=rental_id)

    def return_rental(self, rental_id: int) -> ReturnResponse:
        """Mark an open rental as returned.

        The update is conditional on the rental still being open, so a
        second return of the same rental fails with ``NotFound``
        instead of moving the return date.
        """
        with self.db.transaction() as cursor:
            cursor.execute(
                "UPDATE rental SET return_date = ? WHERE rental_id = ? AND return_date IS NULL",
                (utcnow(), rental_id),
            )
            updated = cursor.rowcount
        if updated == 0:
            logger.warning("Return rejected for rental %s", rental_id)
            raise NotFound("rental not found or already returned")
        logger.info("Rental %s returned", rental_id)
        return ReturnResponse(returned=rental_id)

    def cancel(self, rental_id: int) -> CancelResponse:
        """Delete an open rental.

        Only open rentals can be canceled; a returned or unknown
        rental fails with ``Conflict``.  Canceled rentals are removed
        entirely and leave no history behind.
        """
        with self.db.transaction() as cursor:
            cursor.execute(
                "DELETE FROM rental WHERE rental_id = ? AND return_date IS NULL",
                (rental_id,),
            )
            deleted = cursor.rowcount
        if deleted == 0:
            logger.warning("Cancel rejected for rental %s", rental_id)
            raise Conflict("cannot cancel: rental already returned or not found")
        logger.info("Rental %s canceled", rental_id)
        return CancelResponse(canceled=rental_id)

    def find_available_inventory(
        self, film_id: int, limit: int = DEFAULT_AVAILABLE_LIMIT
    ) -> AvailableInventory:
        """Return up to ``limit`` copies of a film that are not checked out."""
        if limit < 1:
            raise InvalidInput("limit must be a positive integer")
        with self.db.transaction() as cursor:
            rows = cursor.execute(
                """
                SELECT i.inventory_id
                FROM inventory i
                LEFT JOIN rental r
                    ON i.inventory_id = r.inventory_id AND r.return_date IS NULL
                WHERE i.film_id = ? AND r.rental_id IS NULL
                ORDER BY i.inventory_id
                LIMIT ?
                """,
                (film_id, limit),
            ).fetchall()
        return AvailableInventory(inventory_ids=[row["inventory_id"] for row in rows])
