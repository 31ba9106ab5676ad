"""
Service layer for reports.

All queries are read-only and rely on parameterized statements.  Each
report is a single SELECT whose ordering is fully determined by the
query, so the HTTP layer can return the rows as they come.
"""

from __future__ import annotations

import logging
from typing import List

from dvd_rental_api.app.core.db import Database
from dvd_rental_api.app.core.errors import InvalidInput
from dvd_rental_api.app.schemas.report import (
    CustomerRental,
    OutstandingRental,
    StaffRevenue,
    TopRentedFilm,
)


logger = logging.getLogger(__name__)

DEFAULT_TOP_LIMIT = 10


class ReportingService:
    """Service providing the rental reports."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def customer_rentals(self, customer_id: int) -> List[CustomerRental]:
        """Every rental of a customer with its film title, most recent first.

        An unknown customer simply has no rentals.
        """
        with self.db.transaction() as cursor:
            rows = cursor.execute(
                """
                SELECT r.rental_id, r.rental_date, r.return_date, f.title, i.inventory_id
                FROM rental r
                JOIN inventory i ON r.inventory_id = i.inventory_id
                JOIN film f ON i.film_id = f.film_id
                WHERE r.customer_id = ?
                ORDER BY r.rental_date DESC, r.rental_id DESC
                """,
                (customer_id,),
            ).fetchall()
        return [CustomerRental(**dict(row)) for row in rows]

    def not_returned(self) -> List[OutstandingRental]:
        """Open rentals across all customers, oldest first."""
        with self.db.transaction() as cursor:
            rows = cursor.execute(
                """
                SELECT r.rental_id,
                       c.first_name || ' ' || c.last_name AS customer,
                       f.title,
                       r.rental_date,
                       i.inventory_id
                FROM rental r
                JOIN customer c ON r.customer_id = c.customer_id
                JOIN inventory i ON r.inventory_id = i.inventory_id
                JOIN film f ON i.film_id = f.film_id
                WHERE r.return_date IS NULL
                ORDER BY r.rental_date ASC, r.rental_id ASC
                """
            ).fetchall()
        return [OutstandingRental(**dict(row)) for row in rows]

    def top_rented(self, limit: int = DEFAULT_TOP_LIMIT) -> List[TopRentedFilm]:
        """Films ranked by how often they were rented.

        Open and returned rentals both count.  Films with the same
        total are listed alphabetically.
        """
        if limit < 1:
            raise InvalidInput("limit must be a positive integer")
        with self.db.transaction() as cursor:
            rows = cursor.execute(
                """
                SELECT f.title, COUNT(*) AS total
                FROM rental r
                JOIN inventory i ON r.inventory_id = i.inventory_id
                JOIN film f ON i.film_id = f.film_id
                GROUP BY f.film_id, f.title
                ORDER BY total DESC, f.title ASC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [TopRentedFilm(title=row["title"], total=row["total"]) for row in rows]

    def revenue_by_staff(self) -> List[StaffRevenue]:
        """Total payments taken by each staff member, highest first.

        Staff members without payments are included with revenue 0.
        """
        with self.db.transaction() as cursor:
            rows = cursor.execute(
                """
                SELECT s.staff_id,
                       s.first_name || ' ' || s.last_name AS staff,
                       COALESCE(SUM(p.amount), 0) AS revenue
                FROM staff s
                LEFT JOIN payment p ON s.staff_id = p.staff_id
                GROUP BY s.staff_id, s.first_name, s.last_name
                ORDER BY revenue DESC, s.staff_id ASC
                """
            ).fetchall()
        return [
            StaffRevenue(staff_id=row["staff_id"], staff=row["staff"], revenue=row["revenue"])
            for row in rows
        ]
