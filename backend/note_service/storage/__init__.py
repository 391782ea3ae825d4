# Storage package init
"""
Note Service — Storage Layer
=============================

What:  Persistence contract (base.py) and its MongoDB implementations.

Storage Inventory:
    - NoteStorage / TagStorage (abstract): contract used by the services
    - MongoNoteStorage: notes collection, partial $set updates
    - MongoTagStorage:  tags collection
"""
