# Routes package init
"""
Note Service — API Routes Package
==================================

Route Inventory:
    - notes.py:   /api/notes        (note CRUD)
    - tags.py:    /api/tags         (tag CRUD)
    - health.py:  /api/heartbeat, /health

Routes are thin: extract input, call the service, set status and headers.
Business rules live in services; status codes for errors live in
middleware/errors.py.
"""
