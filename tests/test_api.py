"""HTTP surface: routes, status codes and the ``{"error": ...}`` body."""

import sqlite3
import threading
import time

from fastapi.testclient import TestClient

from dvd_rental_api.app.core.config import Settings
from dvd_rental_api.app.core.db import Database
from dvd_rental_api.app.main import create_app


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": "true"}

# --- login ---


def test_login_customer(client):
    resp = client.post("/api/auth/login", json={"email": "Mary.Smith@sakilacustomer.org", "role": "customer"})
    assert resp.status_code == 200
    assert resp.json() == {"token": "customer-1", "role": "customer", "id": 1, "name": "Mary Smith"}


def test_login_unknown_email(client):
    resp = client.post("/api/auth/login", json={"email": "ghost@example.com", "role": "staff"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "staff not found"}


def test_login_bad_role(client):
    resp = client.post("/api/auth/login", json={"email": "Mike.Hillyer@sakilastaff.com", "role": "manager"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "role must be 'staff' or 'customer'"}


def test_login_missing_field(client):
    resp = client.post("/api/auth/login", json={"role": "staff"})
    assert resp.status_code == 400
    assert "email" in resp.json()["error"]


def test_login_empty_email_is_not_authorized(client):
    resp = client.post("/api/auth/login", json={"email": "", "role": "customer"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "customer not found"}

# --- rental workflow ---


def test_rent_return_flow(client):
    resp = client.post("/api/rentals", json={"customer_id": 1, "inventory_id": 1, "staff_id": 1})
    assert resp.status_code == 201
    rental_id = resp.json()["rental_id"]

    resp = client.post("/api/rentals", json={"customer_id": 2, "inventory_id": 1, "staff_id": 1})
    assert resp.status_code == 409
    assert resp.json() == {"error": "inventory already rented"}

    resp = client.post(f"/api/returns/{rental_id}")
    assert resp.status_code == 200
    assert resp.json() == {"returned": rental_id}

    resp = client.post(f"/api/returns/{rental_id}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "rental not found or already returned"}

    resp = client.post(f"/api/rentals/{rental_id}/cancel")
    assert resp.status_code == 409
    assert "cannot cancel" in resp.json()["error"]


def test_cancel_open_rental(client):
    rental_id = client.post(
        "/api/rentals", json={"customer_id": 1, "inventory_id": 4, "staff_id": 2}
    ).json()["rental_id"]
    resp = client.post(f"/api/rentals/{rental_id}/cancel")
    assert resp.status_code == 200
    assert resp.json() == {"canceled": rental_id}

    resp = client.get("/api/inventory/available", params={"film_id": 2})
    assert resp.json() == {"inventory_ids": [4, 5]}


def test_rent_missing_field(client):
    resp = client.post("/api/rentals", json={"customer_id": 1, "inventory_id": 1})
    assert resp.status_code == 400
    assert "staff_id" in resp.json()["error"]


def test_rent_unknown_customer(client):
    resp = client.post("/api/rentals", json={"customer_id": 77, "inventory_id": 1, "staff_id": 1})
    assert resp.status_code == 400
    assert "FOREIGN KEY" in resp.json()["error"]


def test_return_non_integer_id(client):
    resp = client.post("/api/returns/abc")
    assert resp.status_code == 400
    assert "rental_id" in resp.json()["error"]


def test_available_inventory(client):
    client.post("/api/rentals", json={"customer_id": 1, "inventory_id": 2, "staff_id": 1})
    resp = client.get("/api/inventory/available", params={"film_id": 1})
    assert resp.status_code == 200
    assert resp.json() == {"inventory_ids": [1, 3]}

    resp = client.get("/api/inventory/available", params={"film_id": 1, "limit": 1})
    assert resp.json() == {"inventory_ids": [1]}


def test_available_inventory_requires_film_id(client):
    resp = client.get("/api/inventory/available")
    assert resp.status_code == 400
    assert "film_id" in resp.json()["error"]

# --- reports ---


def test_customer_rentals_report(client, add_rental):
    add_rental(6, "2005-05-24T22:53:30+00:00", return_date="2005-05-26T22:04:30+00:00", customer_id=2)
    resp = client.get("/api/reports/customer/2/rentals")
    assert resp.status_code == 200
    rows = resp.json()
    assert len(rows) == 1
    assert rows[0]["title"] == "ADAPTATION HOLES"
    assert rows[0]["inventory_id"] == 6
    assert rows[0]["return_date"] is not None


def test_not_returned_report(client, add_rental):
    second = add_rental(4, "2005-08-01T09:00:00+00:00")
    first = add_rental(1, "2005-07-01T09:00:00+00:00", customer_id=2)
    rows = client.get("/api/reports/not-returned").json()
    assert [r["rental_id"] for r in rows] == [first, second]
    assert rows[0]["customer"] == "Patricia Johnson"


def test_top_rented_report(client, add_rental):
    add_rental(1, "2005-07-01T09:00:00+00:00", return_date="2005-07-02T09:00:00+00:00")
    add_rental(1, "2005-07-03T09:00:00+00:00")
    add_rental(6, "2005-07-03T09:00:00+00:00")
    resp = client.get("/api/reports/top-rented", params={"limit": 1})
    assert resp.status_code == 200
    assert resp.json() == [{"title": "ACADEMY DINOSAUR", "total": 2}]


def test_top_rented_bad_limit(client):
    assert client.get("/api/reports/top-rented", params={"limit": 0}).status_code == 400
    assert client.get("/api/reports/top-rented", params={"limit": "ten"}).status_code == 400


def test_ids_beyond_integer_range_are_bad_requests(client):
    huge = 10**30
    responses = [
        client.post(f"/api/returns/{huge}"),
        client.post(f"/api/rentals/{huge}/cancel"),
        client.post("/api/rentals", json={"customer_id": 1, "inventory_id": huge, "staff_id": 1}),
        client.get("/api/reports/top-rented", params={"limit": huge}),
        client.get("/api/inventory/available", params={"film_id": huge}),
        client.get(f"/api/reports/customer/{huge}/rentals"),
    ]
    for resp in responses:
        assert resp.status_code == 400
        assert resp.json()["error"]


def test_revenue_by_staff_report(client):
    rows = client.get("/api/reports/revenue-by-staff").json()
    assert [r["staff_id"] for r in rows] == [2, 1, 3]
    assert rows[-1] == {"staff_id": 3, "staff": "Ann Idle", "revenue": 0.0}

# --- framework errors ---


def test_unknown_route_uses_error_body(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_wrong_method_uses_error_body(client):
    resp = client.get("/api/rentals")
    assert resp.status_code == 405
    assert "error" in resp.json()


def test_store_failure_is_server_error(tmp_path):
    broken = Database(str(tmp_path))
    app = create_app(Settings(database_url=str(tmp_path), log_level="WARNING"), database=broken)
    # Not entered as a context manager: startup would refuse the store.
    client = TestClient(app)
    resp = client.get("/api/reports/not-returned")
    assert resp.status_code == 500
    assert resp.json()["error"]


def test_health_answers_while_rent_waits_on_lock(db):
    app = create_app(
        Settings(database_url=db.path, log_level="WARNING"),
        database=Database(db.path, timeout=1.0),
    )
    holder = sqlite3.connect(db.path, isolation_level=None)
    responses = {}
    with TestClient(app) as c:
        holder.execute("BEGIN IMMEDIATE")

        def rent():
            responses["rent"] = c.post(
                "/api/rentals", json={"customer_id": 1, "inventory_id": 1, "staff_id": 1}
            )

        worker = threading.Thread(target=rent)
        try:
            worker.start()
            time.sleep(0.2)
            started = time.monotonic()
            health = c.get("/health")
            elapsed = time.monotonic() - started
        finally:
            worker.join()
            holder.rollback()
            holder.close()

    assert health.status_code == 200
    assert elapsed < 0.6
    assert responses["rent"].status_code == 500
    assert responses["rent"].json() == {"error": "database is locked"}
