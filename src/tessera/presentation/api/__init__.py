"""REST API presentation layer for Tessera.

Structure:
    api/
    ├── app.py                # FastAPI application factory
    ├── config.py             # API constants and settings access
    ├── dependencies.py       # Dependency injection
    ├── exception_handlers.py # Error code to HTTP status mapping
    ├── routers/              # API route handlers
    └── schemas/              # Pydantic request/response schemas
"""

from tessera.presentation.api.app import create_app

__all__ = ["create_app"]
