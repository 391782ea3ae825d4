"""
Note Service — Note Business Logic
===================================

What:  Business-rule layer between the note routes and NoteStorage.
How:   Derives short_body, rejects no-op updates, applies the empty-category
       policy, and classifies every storage failure.
Who:   Called by routes/notes.py; calls a NoteStorage implementation.

Error Classification (every method):
    storage raises NotFoundError   → re-raised unchanged      (→ 404)
    storage raises anything else   → InternalError(message, cause=exc),
                                     chained with `raise ... from exc` (→ 500)

    asyncio.CancelledError is not an Exception subclass, so a cancelled
    request unwinds through here untouched.
"""

import logging
from typing import List, Optional

from note_service.exceptions import BadRequestError, InternalError, NotFoundError, is_not_found
from note_service.models.note import generate_short_body
from note_service.schemas.note import CreateNoteDTO, Note, UpdateNoteDTO
from note_service.storage.base import NoteStorage


class NoteService:
    """
    Stateless apart from the storage handle; safe to share across requests.

    Args:
        storage: NoteStorage implementation
        logger:  Logger to use; defaults to this module's logger
    """

    def __init__(self, storage: NoteStorage, logger: Optional[logging.Logger] = None):
        self._storage = storage
        self._logger = logger or logging.getLogger(__name__)

    async def create(self, dto: CreateNoteDTO) -> str:
        """
        Create a note and return its uuid.

        short_body is computed here from dto.body; storage assigns the uuid.
        """
        short_body = generate_short_body(dto.body)
        try:
            return await self._storage.create(dto, short_body)
        except Exception as exc:
            if is_not_found(exc):
                raise
            self._logger.error("failed to create note: %s", exc)
            raise InternalError("failed to create note", cause=exc) from exc

    async def get_one(self, uuid: str) -> Note:
        try:
            return await self._storage.find_one(uuid)
        except Exception as exc:
            if is_not_found(exc):
                raise
            self._logger.error("failed to find note by uuid %s: %s", uuid, exc)
            raise InternalError("failed to find note by uuid", cause=exc) from exc

    async def get_by_category_uuid(self, category_uuid: str) -> List[Note]:
        """
        Notes of a category.

        Raises:
            NotFoundError: The category has no notes. An empty result is never
                returned to the caller.
        """
        try:
            notes = await self._storage.find_by_category_uuid(category_uuid)
        except Exception as exc:
            if is_not_found(exc):
                raise
            self._logger.error("failed to get notes by category uuid %s: %s", category_uuid, exc)
            raise InternalError("failed to get notes by category uuid", cause=exc) from exc

        if not notes:
            raise NotFoundError(resource="notes of category", resource_id=category_uuid)
        return notes

    async def update(self, uuid: str, dto: UpdateNoteDTO, tags_present: bool) -> None:
        """
        Apply a partial update.

        Args:
            uuid:         Note identifier
            dto:          Decoded PATCH payload
            tags_present: Whether the payload carried a "tags" key, even as [] or null

        Raises:
            BadRequestError: header, body and category_uuid are all empty and
                tags_present is false. Storage is not called.
        """
        changes = dto.text_changes()
        if not changes and not tags_present:
            raise BadRequestError("nothing to update")

        short_body = generate_short_body(changes["body"]) if "body" in changes else ""
        try:
            await self._storage.update(uuid, dto, tags_present, short_body)
        except Exception as exc:
            if is_not_found(exc):
                raise
            self._logger.error("failed to update note %s: %s", uuid, exc)
            raise InternalError("failed to update note", cause=exc) from exc

    async def delete(self, uuid: str) -> None:
        try:
            await self._storage.delete(uuid)
        except Exception as exc:
            if is_not_found(exc):
                raise
            self._logger.error("failed to delete note %s: %s", uuid, exc)
            raise InternalError("failed to delete note", cause=exc) from exc
