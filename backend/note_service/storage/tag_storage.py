"""
Note Service — MongoDB Tag Storage
===================================

What:  TagStorage implementation; mirrors MongoNoteStorage for the tags
       collection.
"""

import logging
from typing import List, Optional

import pymongo
from pymongo.asynchronous.collection import AsyncCollection

from note_service.exceptions import NotFoundError
from note_service.models.note import utc_now
from note_service.models.tag import document_to_tag, tag_to_document
from note_service.schemas.tag import CreateTagDTO, Tag, UpdateTagDTO
from note_service.storage.base import TagStorage


class MongoTagStorage(TagStorage):
    def __init__(
        self,
        collection: AsyncCollection,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._collection = collection
        self._timeout = timeout
        self._logger = logger or logging.getLogger(__name__)

    async def create(self, dto: CreateTagDTO) -> str:
        with pymongo.timeout(self._timeout):
            result = await self._collection.insert_one(tag_to_document(dto))
        return str(result.inserted_id)

    async def find_one(self, uuid: str) -> Tag:
        with pymongo.timeout(self._timeout):
            document = await self._collection.find_one({"_id": uuid})
        if document is None:
            raise NotFoundError(resource="tag", resource_id=uuid)
        return document_to_tag(document)

    async def find_many(self, uuids: List[str]) -> List[Tag]:
        self._logger.debug("find %d tags", len(uuids))
        with pymongo.timeout(self._timeout):
            cursor = self._collection.find({"_id": {"$in": uuids}})
            documents = await cursor.to_list()
        # keep the order the caller asked for
        by_id = {str(document["_id"]): document_to_tag(document) for document in documents}
        return [by_id[uuid] for uuid in uuids if uuid in by_id]

    async def update(self, uuid: str, dto: UpdateTagDTO) -> None:
        with pymongo.timeout(self._timeout):
            result = await self._collection.update_one(
                {"_id": uuid},
                {"$set": {"name": dto.name, "updated_at": utc_now()}},
            )
        if result.matched_count == 0:
            raise NotFoundError(resource="tag", resource_id=uuid)

    async def delete(self, uuid: str) -> None:
        with pymongo.timeout(self._timeout):
            result = await self._collection.delete_one({"_id": uuid})
        if result.deleted_count == 0:
            raise NotFoundError(resource="tag", resource_id=uuid)
