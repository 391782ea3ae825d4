# Services package init
"""
Note Service — Services Layer
==============================

What:  Business logic layer sitting between routes (HTTP) and storage (persistence).
How:   Services accept DTOs, apply business rules, and classify storage errors.
       Instances are built in the app lifespan and injected into routes via
       FastAPI's dependency injection (database.py).

Service Inventory:
    - NoteService: note CRUD, short_body derivation, partial-update rules
    - TagService:  tag CRUD
"""
