"""
Pydantic schema definitions for API payloads.

Each domain (products, cart, checkout) defines its own Pydantic
models for request and response bodies.  Schemas are kept apart from
the SQLite rows so the JSON shape does not depend on column names.
"""
