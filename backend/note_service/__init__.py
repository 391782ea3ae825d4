"""
Note Service — Application Package Initializer
===============================================

What: Marks the `note_service` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, derived fields, error classification
    ├─────────────────────────────────────┤
    │        Schemas & Models (Data)      │  ← Pydantic DTOs + MongoDB document mapping
    ├─────────────────────────────────────┤
    │         Storage (Persistence)       │  ← Async MongoDB collections
    └─────────────────────────────────────┘

    Routes handle status codes and headers, services own business rules,
    storage owns the persisted document shape.
"""

__version__ = "1.0.0"
