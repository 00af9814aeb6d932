"""
App assembly entry point.

Re-exports the FastAPI ``app`` from ``crudkit.api.main`` for ASGI servers
(``uvicorn app:app``).
"""

from crudkit.api.main import app  # noqa: F401
