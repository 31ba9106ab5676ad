#!/usr/bin/env python3
"""
Load a small demo catalogue into a DVD Rental SQLite database.

The script applies pending migrations and inserts films, inventory
copies, customers, staff members and a few payments so every endpoint
has something to show.  It refuses to touch a database that already
holds films unless ``--force`` is given.

Usage:
    python seed_demo_data.py --db ./dvdrental.db
"""

import argparse
import logging
import sys

from dvd_rental_api.app.core.db import Database, resolve_database_path
from dvd_rental_api.app.core.errors import StoreUnavailable
from dvd_rental_api.app.core.logging_config import setup_logging


FILMS = [
    ("ACADEMY DINOSAUR", 3),
    ("ACE GOLDFINGER", 2),
    ("ADAPTATION HOLES", 2),
    ("AFFAIR PREJUDICE", 4),
]

CUSTOMERS = [
    ("Mary", "Smith", "mary.smith@sakilacustomer.org"),
    ("Patricia", "Johnson", "patricia.johnson@sakilacustomer.org"),
    ("Linda", "Williams", "linda.williams@sakilacustomer.org"),
]

STAFF = [
    ("Mike", "Hillyer", "Mike.Hillyer@sakilastaff.com"),
    ("Jon", "Stephens", "Jon.Stephens@sakilastaff.com"),
]

# (customer_id, staff_id, amount)
PAYMENTS = [
    (1, 1, 2.99),
    (2, 1, 0.99),
    (3, 1, 5.99),
]


def seed(db: Database, force: bool = False) -> int:
    """Insert the demo rows; return the number of films added."""
    db.init_db()
    with db.transaction() as cursor:
        existing = cursor.execute("SELECT COUNT(*) FROM film").fetchone()[0]
        if existing and not force:
            logging.getLogger(__name__).info("Database already has %s films; nothing to do", existing)
            return 0
        for title, copies in FILMS:
            cursor.execute("INSERT INTO film (title) VALUES (?)", (title,))
            film_id = cursor.lastrowid
            cursor.executemany(
                "INSERT INTO inventory (film_id) VALUES (?)",
                [(film_id,)] * copies,
            )
        first_customer = cursor.execute("SELECT COALESCE(MAX(customer_id), 0) FROM customer").fetchone()[0]
        cursor.executemany(
            "INSERT INTO customer (first_name, last_name, email) VALUES (?, ?, ?)", CUSTOMERS
        )
        first_staff = cursor.execute("SELECT COALESCE(MAX(staff_id), 0) FROM staff").fetchone()[0]
        cursor.executemany(
            "INSERT INTO staff (first_name, last_name, email) VALUES (?, ?, ?)", STAFF
        )
        cursor.executemany(
            "INSERT INTO payment (customer_id, staff_id, amount) VALUES (?, ?, ?)",
            [(first_customer + c, first_staff + s, amount) for c, s, amount in PAYMENTS],
        )
    return len(FILMS)


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed a DVD Rental SQLite database with demo data.")
    ap.add_argument("--db", default="dvdrental.db", help="SQLite DB file, resolved like DATABASE_URL (created if missing)")
    ap.add_argument("--force", action="store_true", help="Insert even if films already exist")
    args = ap.parse_args()

    setup_logging("INFO")
    db = Database(resolve_database_path(args.db))
    try:
        added = seed(db, force=args.force)
    except StoreUnavailable as exc:
        print(f"[!] Cannot seed {db.path}: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"[+] Added {added} films to {db.path}")


if __name__ == "__main__":
    main()
