"""
Note Service — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Overview:
    ├── mock_note_storage / mock_tag_storage: AsyncMock storages for service tests
    ├── mock_collection: AsyncMock pymongo collection for storage tests
    ├── note_storage / tag_storage: in-memory storages for HTTP tests
    └── test_client: HTTPX AsyncClient against the app, services overridden
"""

import copy
import os
from datetime import datetime, timezone
from typing import Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Before any note_service import: no real MongoDB, quiet logs
os.environ["MONGODB_HOST"] = "localhost"
os.environ["MONGODB_TIMEOUT"] = "1"
os.environ["LOG_LEVEL"] = "WARNING"

from note_service.database import get_note_service, get_tag_service  # noqa: E402
from note_service.exceptions import NotFoundError  # noqa: E402
from note_service.models.note import document_to_note, note_to_document, utc_now  # noqa: E402
from note_service.models.tag import document_to_tag, tag_to_document  # noqa: E402
from note_service.schemas.note import CreateNoteDTO, Note, UpdateNoteDTO  # noqa: E402
from note_service.schemas.tag import CreateTagDTO, Tag, UpdateTagDTO  # noqa: E402
from note_service.services.note_service import NoteService  # noqa: E402
from note_service.services.tag_service import TagService  # noqa: E402
from note_service.storage.base import NoteStorage, TagStorage  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-memory storages (same contract as the MongoDB implementations)
# ══════════════════════════════════════════════════════════════════════════

class InMemoryNoteStorage(NoteStorage):
    def __init__(self):
        self.documents: Dict[str, dict] = {}
        self.update_calls = 0

    async def create(self, dto: CreateNoteDTO, short_body: str) -> str:
        document = note_to_document(dto, short_body)
        self.documents[document["_id"]] = document
        return document["_id"]

    async def find_one(self, uuid: str) -> Note:
        if uuid not in self.documents:
            raise NotFoundError(resource="note", resource_id=uuid)
        return document_to_note(copy.deepcopy(self.documents[uuid]))

    async def find_by_category_uuid(self, category_uuid: str) -> List[Note]:
        return [
            document_to_note(document)
            for document in self.documents.values()
            if document["category_uuid"] == category_uuid
        ]

    async def update(self, uuid: str, dto: UpdateNoteDTO, tags_update: bool, short_body: str = "") -> None:
        self.update_calls += 1
        if uuid not in self.documents:
            raise NotFoundError(resource="note", resource_id=uuid)
        fields = dto.text_changes()
        if "body" in fields:
            fields["short_body"] = short_body
        if tags_update:
            fields["tags"] = list(dto.tags or [])
        fields["updated_at"] = utc_now()
        self.documents[uuid].update(fields)

    async def delete(self, uuid: str) -> None:
        if self.documents.pop(uuid, None) is None:
            raise NotFoundError(resource="note", resource_id=uuid)


class InMemoryTagStorage(TagStorage):
    def __init__(self):
        self.documents: Dict[str, dict] = {}

    async def create(self, dto: CreateTagDTO) -> str:
        document = tag_to_document(dto)
        self.documents[document["_id"]] = document
        return document["_id"]

    async def find_one(self, uuid: str) -> Tag:
        if uuid not in self.documents:
            raise NotFoundError(resource="tag", resource_id=uuid)
        return document_to_tag(self.documents[uuid])

    async def find_many(self, uuids: List[str]) -> List[Tag]:
        return [document_to_tag(self.documents[uuid]) for uuid in uuids if uuid in self.documents]

    async def update(self, uuid: str, dto: UpdateTagDTO) -> None:
        if uuid not in self.documents:
            raise NotFoundError(resource="tag", resource_id=uuid)
        self.documents[uuid]["name"] = dto.name

    async def delete(self, uuid: str) -> None:
        if self.documents.pop(uuid, None) is None:
            raise NotFoundError(resource="tag", resource_id=uuid)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_note_storage():
    """AsyncMock honoring the NoteStorage interface."""
    return AsyncMock(spec=NoteStorage)


@pytest.fixture
def mock_tag_storage():
    return AsyncMock(spec=TagStorage)


@pytest.fixture
def mock_collection():
    """
    Mock async pymongo collection.

    find() is synchronous and returns a cursor whose to_list() is awaited,
    matching AsyncCollection.
    """
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.create_index = AsyncMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    return collection


@pytest.fixture
def sample_note_document():
    now = datetime.now(timezone.utc)
    return {
        "_id": "5b1c1a52-2d4c-4a8e-9f8e-0c0a4c1f6a11",
        "header": "Shopping",
        "body": "Milk, eggs, bread",
        "short_body": "Milk, eggs, bread",
        "category_uuid": "c1",
        "tags": ["t1", "t2"],
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def note_storage():
    return InMemoryNoteStorage()


@pytest.fixture
def tag_storage():
    return InMemoryTagStorage()


@pytest_asyncio.fixture
async def test_client(note_storage, tag_storage):
    """
    HTTPX AsyncClient talking to a fresh app.

    The lifespan is not run, so no MongoDB client is opened; the service
    dependencies are overridden with services over in-memory storages.
    """
    from note_service.main import create_app

    app = create_app()
    app.dependency_overrides[get_note_service] = lambda: NoteService(note_storage)
    app.dependency_overrides[get_tag_service] = lambda: TagService(tag_storage)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
