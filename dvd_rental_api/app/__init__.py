"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (settings, logging, errors, database), ``schemas``
(pydantic payloads), ``services`` (business rules and reports) and
``api`` (FastAPI routers).
"""

from .main import app, create_app  # noqa: F401
