"""
SQLite database integration and simple migration system.

This module provides the ``Database`` handle used by every service.
The handle is constructed once by ``create_app`` and injected into
route handlers through the ``get_db`` dependency, so tests can point
the application at a throw-away database file.

Every store call runs inside ``Database.transaction``: one connection
with a bounded busy timeout, committed on success, rolled back on any
error.  Driver errors leave this module as ``StoreUnavailable``;
integers too large for an SQLite column become ``InvalidInput``.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request

from .config import Settings, settings as default_settings
from .errors import InvalidInput, StoreUnavailable


logger = logging.getLogger(__name__)

# Largest value an SQLite INTEGER column can hold.
MAX_SQLITE_INTEGER = 2**63 - 1


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: reference tables and rentals, named after the
    # dvdrental sample database.
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS film (
            film_id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS inventory (
            inventory_id INTEGER PRIMARY KEY AUTOINCREMENT,
            film_id INTEGER NOT NULL,
            FOREIGN KEY(film_id) REFERENCES film(film_id)
        );

        CREATE TABLE IF NOT EXISTS customer (
            customer_id INTEGER PRIMARY KEY AUTOINCREMENT,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            email TEXT
        );

        CREATE TABLE IF NOT EXISTS staff (
            staff_id INTEGER PRIMARY KEY AUTOINCREMENT,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            email TEXT
        );

        CREATE TABLE IF NOT EXISTS rental (
            rental_id INTEGER PRIMARY KEY AUTOINCREMENT,
            rental_date TIMESTAMP NOT NULL,
            inventory_id INTEGER NOT NULL,
            customer_id INTEGER NOT NULL,
            staff_id INTEGER NOT NULL,
            return_date TIMESTAMP,
            FOREIGN KEY(inventory_id) REFERENCES inventory(inventory_id),
            FOREIGN KEY(customer_id) REFERENCES customer(customer_id),
            FOREIGN KEY(staff_id) REFERENCES staff(staff_id)
        );

        CREATE TABLE IF NOT EXISTS payment (
            payment_id INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_id INTEGER NOT NULL,
            staff_id INTEGER NOT NULL,
            rental_id INTEGER,
            amount REAL NOT NULL,
            payment_date TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(customer_id) REFERENCES customer(customer_id),
            FOREIGN KEY(staff_id) REFERENCES staff(staff_id),
            FOREIGN KEY(rental_id) REFERENCES rental(rental_id) ON DELETE SET NULL
        );
        """,
    ),
    # Migration 2: at most one open rental per inventory item, plus
    # lookup indices used by the reports.
    (
        2,
        """
        CREATE UNIQUE INDEX IF NOT EXISTS ux_rental_open_inventory
            ON rental(inventory_id) WHERE return_date IS NULL;
        CREATE INDEX IF NOT EXISTS idx_rental_customer_id ON rental(customer_id);
        CREATE INDEX IF NOT EXISTS idx_inventory_film_id ON inventory(film_id);
        CREATE INDEX IF NOT EXISTS idx_payment_staff_id ON payment(staff_id);
        CREATE INDEX IF NOT EXISTS idx_customer_email ON customer(lower(email));
        CREATE INDEX IF NOT EXISTS idx_staff_email ON staff(lower(email));
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used directly.  Relative paths are resolved
    against the project root (the directory holding ``dvd_rental_api``).
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class Database:
    """Explicit handle on the backing store."""

    def __init__(self, path: str, timeout: float = 5.0) -> None:
        self.path = path
        self.timeout = timeout

    @classmethod
    def from_settings(cls, cfg: Settings = default_settings) -> "Database":
        return cls(resolve_database_path(cfg.database_url), timeout=cfg.db_timeout)

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name.  Foreign key enforcement is switched on per connection
        because SQLite leaves it off by default.
        """
        conn = sqlite3.connect(self.path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor whose work is committed or rolled back as a unit."""
        conn = None
        try:
            conn = self.get_connection()
            yield conn.cursor()
            conn.commit()
        except sqlite3.Error as exc:
            if conn is not None:
                conn.rollback()
            logger.error("Store call failed: %s", exc)
            raise StoreUnavailable(str(exc)) from exc
        except OverflowError as exc:
            # Parameter outside the 64-bit INTEGER range.
            if conn is not None:
                conn.rollback()
            raise InvalidInput(f"integer out of range: {exc}") from exc
        except Exception:
            if conn is not None:
                conn.rollback()
            raise
        finally:
            if conn is not None:
                conn.close()

    def ping(self) -> None:
        """Fail with ``StoreUnavailable`` unless the store answers a trivial query."""
        with self.transaction() as cursor:
            cursor.execute("SELECT 1").fetchone()

    def init_db(self) -> None:
        """Initialise the database and apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks
        the current schema version and applies every migration in
        ``MIGRATIONS`` with a higher version number.
        """
        with self.transaction() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    logger.info("Applying migration %s", version)
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the handle attached by ``create_app``."""
    return request.app.state.db
