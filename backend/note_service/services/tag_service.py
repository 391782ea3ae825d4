"""
Note Service — Tag Business Logic
==================================

What:  Business-rule layer for tags. Same classification rule as NoteService:
       not-found passes through, anything else becomes InternalError.
"""

import logging
from typing import List, Optional

from note_service.exceptions import BadRequestError, InternalError, NotFoundError, is_not_found
from note_service.schemas.tag import CreateTagDTO, Tag, UpdateTagDTO
from note_service.storage.base import TagStorage


class TagService:
    def __init__(self, storage: TagStorage, logger: Optional[logging.Logger] = None):
        self._storage = storage
        self._logger = logger or logging.getLogger(__name__)

    async def create(self, dto: CreateTagDTO) -> str:
        try:
            return await self._storage.create(dto)
        except Exception as exc:
            if is_not_found(exc):
                raise
            self._logger.error("failed to create tag: %s", exc)
            raise InternalError("failed to create tag", cause=exc) from exc

    async def get_one(self, uuid: str) -> Tag:
        try:
            return await self._storage.find_one(uuid)
        except Exception as exc:
            if is_not_found(exc):
                raise
            self._logger.error("failed to find tag by uuid %s: %s", uuid, exc)
            raise InternalError("failed to find tag by uuid", cause=exc) from exc

    async def get_by_uuids(self, uuids: List[str]) -> List[Tag]:
        """Tags for the given uuids; none found is a NotFoundError."""
        try:
            tags = await self._storage.find_many(uuids)
        except Exception as exc:
            if is_not_found(exc):
                raise
            self._logger.error("failed to get tags by uuids: %s", exc)
            raise InternalError("failed to get tags by uuids", cause=exc) from exc

        if not tags:
            raise NotFoundError(resource="tags", resource_id=",".join(uuids))
        return tags

    async def update(self, uuid: str, dto: UpdateTagDTO) -> None:
        if not dto.name:
            raise BadRequestError("nothing to update")
        try:
            await self._storage.update(uuid, dto)
        except Exception as exc:
            if is_not_found(exc):
                raise
            self._logger.error("failed to update tag %s: %s", uuid, exc)
            raise InternalError("failed to update tag", cause=exc) from exc

    async def delete(self, uuid: str) -> None:
        try:
            await self._storage.delete(uuid)
        except Exception as exc:
            if is_not_found(exc):
                raise
            self._logger.error("failed to delete tag %s: %s", uuid, exc)
            raise InternalError("failed to delete tag", cause=exc) from exc
