"""
Note Service — MongoDB Note Storage
====================================

What:  NoteStorage implementation over an async pymongo collection.
How:   Documents are keyed by a uuid4 string in `_id`; partial updates are a
       single `$set` built from the fields the client supplied.
Who:   Constructed in the app lifespan and handed to NoteService.

Concurrency:
    Every operation touches exactly one document (or one query), so MongoDB's
    single-document atomicity is the only guarantee relied upon. Each call runs
    under `pymongo.timeout(...)`, a client-side deadline covering server
    selection and the operation itself. Cancelling the request task cancels
    the awaited driver call.

Query plans:
    find_one / update / delete:  {"_id": uuid}            → _id index
    find_by_category_uuid:       {"category_uuid": uuid}  → category_uuid index
"""

import logging
from typing import Any, Dict, List, Optional

import pymongo
from pymongo.asynchronous.collection import AsyncCollection

from note_service.exceptions import NotFoundError
from note_service.models.note import (
    CATEGORY_INDEX,
    document_to_note,
    documents_to_notes,
    generate_short_body,
    note_to_document,
    utc_now,
)
from note_service.schemas.note import CreateNoteDTO, Note, UpdateNoteDTO
from note_service.storage.base import NoteStorage


class MongoNoteStorage(NoteStorage):
    """
    Notes collection access.

    Args:
        collection: AsyncCollection holding note documents
        timeout:    Per-operation deadline in seconds (None disables it)
        logger:     Logger to use; defaults to this module's logger
    """

    def __init__(
        self,
        collection: AsyncCollection,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._collection = collection
        self._timeout = timeout
        self._logger = logger or logging.getLogger(__name__)

    async def ensure_indexes(self) -> None:
        with pymongo.timeout(self._timeout):
            await self._collection.create_index(CATEGORY_INDEX)

    async def create(self, dto: CreateNoteDTO, short_body: str) -> str:
        document = note_to_document(dto, short_body)
        self._logger.debug("create note document")
        with pymongo.timeout(self._timeout):
            result = await self._collection.insert_one(document)
        note_uuid = str(result.inserted_id)
        self._logger.debug("created note %s", note_uuid)
        return note_uuid

    async def find_one(self, uuid: str) -> Note:
        self._logger.debug("find note %s", uuid)
        with pymongo.timeout(self._timeout):
            document = await self._collection.find_one({"_id": uuid})
        if document is None:
            raise NotFoundError(resource="note", resource_id=uuid)
        return document_to_note(document)

    async def find_by_category_uuid(self, category_uuid: str) -> List[Note]:
        self._logger.debug("find notes by category %s", category_uuid)
        with pymongo.timeout(self._timeout):
            cursor = self._collection.find({"category_uuid": category_uuid})
            documents = await cursor.to_list()
        return documents_to_notes(documents)

    async def update(
        self,
        uuid: str,
        dto: UpdateNoteDTO,
        tags_update: bool,
        short_body: str = "",
    ) -> None:
        fields: Dict[str, Any] = dto.text_changes()
        if "body" in fields:
            fields["short_body"] = short_body or generate_short_body(fields["body"])
        if tags_update:
            # null and [] both clear the tags
            fields["tags"] = list(dto.tags or [])
        fields["updated_at"] = utc_now()

        self._logger.debug("update note %s fields %s", uuid, sorted(fields))
        with pymongo.timeout(self._timeout):
            result = await self._collection.update_one({"_id": uuid}, {"$set": fields})
        if result.matched_count == 0:
            raise NotFoundError(resource="note", resource_id=uuid)

    async def delete(self, uuid: str) -> None:
        self._logger.debug("delete note %s", uuid)
        with pymongo.timeout(self._timeout):
            result = await self._collection.delete_one({"_id": uuid})
        if result.deleted_count == 0:
            raise NotFoundError(resource="note", resource_id=uuid)
