"""
Top-level package for the DVD Rental API.

All functionality lives in submodules under ``app``; import the
application as ``dvd_rental_api.app.main:app``.
"""

__all__ = []
