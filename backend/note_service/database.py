"""
Note Service — MongoDB Client Management
=========================================

What:  Async MongoDB client lifecycle, wiring of storages/services, and the
       FastAPI dependencies that hand services to route handlers.
How:   The lifespan (main.py) calls `connect()` on startup and `disconnect()`
       on shutdown. Everything built here is stored on `app.state`; routes
       receive services through `Depends(get_note_service)` etc., which tests
       replace with `app.dependency_overrides`.
Who:   main.py (lifespan), routes (dependencies), health route (ping).

Connection handling:
    AsyncMongoClient owns its own connection pool and is safe for concurrent
    use by every request task. It connects lazily, so startup succeeds even
    while MongoDB is still coming up; the first operation waits for server
    selection up to MONGODB_TIMEOUT.
"""

import logging

from fastapi import FastAPI, Request
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from note_service.config import Settings
from note_service.services.note_service import NoteService
from note_service.services.tag_service import TagService
from note_service.storage.note_storage import MongoNoteStorage
from note_service.storage.tag_storage import MongoTagStorage

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncMongoClient:
    return AsyncMongoClient(**settings.mongo_client_kwargs())


async def connect(app: FastAPI, settings: Settings) -> None:
    """
    Open the MongoDB client and build the storage/service graph on app.state.

    Index creation failures are logged, not raised: the service still starts
    and reports the database as disconnected on /health.
    """
    client = create_client(settings)
    database = client[settings.mongodb_database]

    note_storage = MongoNoteStorage(
        database[settings.mongodb_notes_collection],
        timeout=settings.mongodb_timeout,
        logger=logging.getLogger("note_service.storage.notes"),
    )
    tag_storage = MongoTagStorage(
        database[settings.mongodb_tags_collection],
        timeout=settings.mongodb_timeout,
        logger=logging.getLogger("note_service.storage.tags"),
    )

    try:
        await note_storage.ensure_indexes()
    except PyMongoError as e:
        logger.warning("Could not ensure note indexes: %s", str(e))

    app.state.mongo_client = client
    app.state.note_service = NoteService(
        note_storage, logger=logging.getLogger("note_service.services.notes")
    )
    app.state.tag_service = TagService(
        tag_storage, logger=logging.getLogger("note_service.services.tags")
    )
    logger.info(
        "MongoDB client ready: %s:%d/%s",
        settings.mongodb_host,
        settings.mongodb_port,
        settings.mongodb_database,
    )


async def disconnect(app: FastAPI) -> None:
    """Close the client and all pooled connections."""
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        await client.close()
        app.state.mongo_client = None


async def ping(client: AsyncMongoClient) -> bool:
    """Lightweight connectivity probe used by the health check."""
    try:
        await client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning("MongoDB ping failed: %s", str(e))
        return False


# ── Dependencies ──────────────────────────────────────────────────────────

def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service


def get_tag_service(request: Request) -> TagService:
    return request.app.state.tag_service


def get_mongo_client(request: Request) -> AsyncMongoClient:
    return request.app.state.mongo_client
