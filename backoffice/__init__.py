"""
Tienda Back Office — Application Package Initializer
=====================================================

What: Marks the `backoffice` directory as a Python package.
Why:  Enables module imports like `from backoffice.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The back office follows a layered architecture:

    ┌─────────────────────────────────────┐
    │     Routes + Dispatch (HTTP Layer)  │  ← ?path= routing, cookies, redirects
    ├─────────────────────────────────────┤
    │      Controllers (Validation)       │  ← Input schemas, status codes
    ├─────────────────────────────────────┤
    │     Services (Data Access / Auth)   │  ← One SQL statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Each layer only talks to the one below it, so the dispatch table,
    controllers and services can be tested without a running server.
"""

__version__ = "1.0.0"
