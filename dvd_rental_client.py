"""DVD Rental API client.

A thin wrapper around the HTTP surface of the DVD Rental API for
front-ends and scripts.  The base URL defaults to the ``API_BASE``
environment variable (``http://localhost:8080`` when unset).  The
client uses the ``requests`` library internally.

Every method returns a tuple ``(data, error)``: on success ``error`` is
``None``; on failure ``data`` is ``None`` (or an empty list for list
endpoints) and ``error`` is a dictionary with ``status_code`` and
``message`` keys, where ``message`` is the server's ``error`` field.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "http://localhost:8080"

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class DvdRentalClient:
    """Client for the DVD Rental API."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API.  Defaults to ``API_BASE``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = (base_url or os.getenv("API_BASE") or DEFAULT_API_BASE).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        # Label returned by the last successful login, e.g. "staff-1".
        self.token: Optional[str] = None

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET`` or ``POST``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/rentals``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    message = exc.response.json().get("error", "")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str, params: Dict[str, Any] | None = None) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", path, params=params)
        if error:
            return [], error
        return data or [], None

    # ------------------------------------------------------------------
    # Login and rentals
    # ------------------------------------------------------------------
    def login(self, email: str, role: str) -> Result:
        """Identify as a staff member or customer and remember the token."""
        data, error = self._request("POST", "/api/auth/login", json_body={"email": email, "role": role})
        if data:
            self.token = data.get("token")
        return data, error

    def rent(self, customer_id: int, inventory_id: int, staff_id: int) -> Result:
        payload = {"customer_id": customer_id, "inventory_id": inventory_id, "staff_id": staff_id}
        return self._request("POST", "/api/rentals", json_body=payload)

    def return_rental(self, rental_id: int) -> Result:
        return self._request("POST", f"/api/returns/{rental_id}")

    def cancel_rental(self, rental_id: int) -> Result:
        return self._request("POST", f"/api/rentals/{rental_id}/cancel")

    def available_inventory(self, film_id: int, limit: Optional[int] = None) -> Tuple[List[int], Optional[Dict[str, Any]]]:
        """Inventory ids of a film that can be rented now."""
        params: Dict[str, Any] = {"film_id": film_id}
        if limit is not None:
            params["limit"] = limit
        data, error = self._request("GET", "/api/inventory/available", params=params)
        if error:
            return [], error
        return (data or {}).get("inventory_ids") or [], None

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------
    def customer_rentals(self, customer_id: int) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._list(f"/api/reports/customer/{customer_id}/rentals")

    def not_returned(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._list("/api/reports/not-returned")

    def top_rented(self, limit: int = 10) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._list("/api/reports/top-rented", params={"limit": limit})

    def revenue_by_staff(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._list("/api/reports/revenue-by-staff")

    def health(self) -> bool:
        """Return True when the liveness probe answers ``{"ok": "true"}``."""
        data, error = self._request("GET", "/health")
        return error is None and bool(data) and data.get("ok") == "true"
