"""
Pydantic schema definitions for API payloads.

Each resource (accounts, transactions) defines its own Pydantic
models for request and response bodies.  Schemas are separated from
the stored documents to decouple the API representation from
persistence; the field-name tables in ``core.fields`` connect the two.
"""
