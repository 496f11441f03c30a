"""
HairBook Backend — Application Package Initializer
===================================================

What: Marks the `app` directory as a Python package.
Who:  Used by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is layered the same way for every resource:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Middleware / Auth Gate            │  ← request id, access log, bearer check
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, hashing, token issuing
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the ORM directly; services never know about HTTP
    status codes (they raise exceptions from `app.exceptions`).
"""

__version__ = "1.0.0"
