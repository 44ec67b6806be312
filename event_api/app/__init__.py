"""
Application package initializer.

The project is organised by concern: ``core`` holds configuration,
logging, storage primitives and credential helpers, ``schemas`` the
pydantic wire models, ``services`` the SQL-backed accessors and
``api/v1`` the route handlers.  Versioning is handled by grouping
routers under the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
