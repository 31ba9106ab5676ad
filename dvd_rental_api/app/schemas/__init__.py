"""
Pydantic schema definitions for API payloads.

Each area (login, rentals, reports) defines its own models for request
and response bodies.  Schemas are separated from the database tables
to decouple the API representation from persistence.
"""
