"""
RecipeBox Backend — Application Package Initializer
===================================================

What:  Marks the `recipebox` directory as a Python package.
Who:   Used by Alembic, pytest, and uvicorn (`uvicorn recipebox.main:app`).

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Identity, Recipes,      │  ← Domain rules
    │   Bookmarks, Ranking)               │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Services never import from routes; routes translate HTTP to service calls
    and the global exception handlers translate service errors to HTTP.
"""

__version__ = "1.0.0"
