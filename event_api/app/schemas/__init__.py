"""
Pydantic schema definitions for API payloads.

Schemas are separated from the database rows to decouple the API
representation from persistence.  Field names on the wire are
camelCase (``ownerId``, ``userId``) while Python attributes stay
snake_case.
"""
