"""
Catalog package for the resource library API.

This package holds the resource query engine (filters, search and
counts), the schemas it works on, the ``ResourceStore`` data layer that
loads the JSON content files, and the route definitions exposing all
of it under ``/api/resources``. The query functions are pure and can be
used without FastAPI.
"""

from .router import router as catalog_router  # noqa: F401
