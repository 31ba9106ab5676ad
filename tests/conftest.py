"""Shared fixtures: a migrated SQLite database with a small catalogue."""

import pytest
from fastapi.testclient import TestClient

from dvd_rental_api.app.core.config import Settings
from dvd_rental_api.app.core.db import Database
from dvd_rental_api.app.main import create_app

# film_id, title
FILMS = [
    (1, "ACADEMY DINOSAUR"),
    (2, "ACE GOLDFINGER"),
    (3, "ADAPTATION HOLES"),
]

# inventory_id, film_id
INVENTORY = [(1, 1), (2, 1), (3, 1), (4, 2), (5, 2), (6, 3)]

CUSTOMERS = [
    (1, "Mary", "Smith", "MARY.SMITH@sakilacustomer.org"),
    (2, "Patricia", "Johnson", "patricia.johnson@sakilacustomer.org"),
]

STAFF = [
    (1, "Mike", "Hillyer", "Mike.Hillyer@sakilastaff.com"),
    (2, "Jon", "Stephens", "Jon.Stephens@sakilastaff.com"),
    (3, "Ann", "Idle", "ann.idle@sakilastaff.com"),
]

# customer_id, staff_id, amount.  Staff 3 takes no payments.
PAYMENTS = [(1, 1, 2.99), (2, 1, 0.99), (1, 2, 5.99)]


@pytest.fixture
def db(tmp_path):
    database = Database(str(tmp_path / "dvdrental.db"), timeout=5)
    database.init_db()
    with database.transaction() as cursor:
        cursor.executemany("INSERT INTO film (film_id, title) VALUES (?, ?)", FILMS)
        cursor.executemany("INSERT INTO inventory (inventory_id, film_id) VALUES (?, ?)", INVENTORY)
        cursor.executemany(
            "INSERT INTO customer (customer_id, first_name, last_name, email) VALUES (?, ?, ?, ?)",
            CUSTOMERS,
        )
        cursor.executemany(
            "INSERT INTO staff (staff_id, first_name, last_name, email) VALUES (?, ?, ?, ?)",
            STAFF,
        )
        cursor.executemany(
            "INSERT INTO payment (customer_id, staff_id, amount) VALUES (?, ?, ?)", PAYMENTS
        )
    return database


@pytest.fixture
def add_rental(db):
    """Insert a rental row directly and return its id."""

    def _add(inventory_id, rental_date, return_date=None, customer_id=1, staff_id=1):
        with db.transaction() as cursor:
            cursor.execute(
                "INSERT INTO rental (rental_date, inventory_id, customer_id, staff_id, return_date) "
                "VALUES (?, ?, ?, ?, ?)",
                (rental_date, inventory_id, customer_id, staff_id, return_date),
            )
            return cursor.lastrowid

    return _add


@pytest.fixture
def client(db):
    cfg = Settings(database_url=db.path, log_level="WARNING")
    with TestClient(create_app(cfg, database=db)) as c:
        yield c
