"""
Quillpost Backend — Application Package Initializer
===================================================

What: Marks the `quillpost` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Users/Posts/Comments)│  ← Not-found and existence rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database & Storage (SQLite)     │  ← Engine, sessions, single-row SQL
    └─────────────────────────────────────┘

    Routes translate HTTP to service calls, services raise typed exceptions,
    and the storage layer issues exactly one statement per operation.
"""

__version__ = "1.0.0"
