"""
Note Service — Abstract Storage Interfaces
===========================================

What:  Abstract base classes defining the persistence contract consumed by
       the services.
How:   MongoDB implementations live in note_storage.py / tag_storage.py;
       tests substitute AsyncMock or in-memory implementations.
Who:   NoteService and TagService depend on these types only.

Error contract shared by every implementation:
    - A missing document is reported as NotFoundError (exceptions.py).
    - Any other failure (driver, network, timeout) propagates as raised;
      the service layer classifies and wraps it.
    - An empty query result is NOT an error at this layer.
"""

from abc import ABC, abstractmethod
from typing import List

from note_service.schemas.note import CreateNoteDTO, Note, UpdateNoteDTO
from note_service.schemas.tag import CreateTagDTO, Tag, UpdateTagDTO


class NoteStorage(ABC):
    """Persistence contract for notes."""

    @abstractmethod
    async def create(self, dto: CreateNoteDTO, short_body: str) -> str:
        """
        Persist a new note and return its freshly assigned uuid.

        Args:
            dto:        Validated creation payload
            short_body: Derived summary of dto.body computed by the service
        """
        ...

    @abstractmethod
    async def find_one(self, uuid: str) -> Note:
        """Return the note with this uuid or raise NotFoundError."""
        ...

    @abstractmethod
    async def find_by_category_uuid(self, category_uuid: str) -> List[Note]:
        """Return every note of the category; an empty list is a valid result."""
        ...

    @abstractmethod
    async def update(
        self,
        uuid: str,
        dto: UpdateNoteDTO,
        tags_update: bool,
        short_body: str = "",
    ) -> None:
        """
        Apply a partial update.

        Only present, non-empty text fields are written; short_body is written
        together with body. Tags are replaced wholesale only when tags_update
        is true, and a null tags value is stored as an empty list.

        Raises:
            NotFoundError: No note has this uuid.
        """
        ...

    @abstractmethod
    async def delete(self, uuid: str) -> None:
        """Delete the note or raise NotFoundError."""
        ...


class TagStorage(ABC):
    """Persistence contract for tags."""

    @abstractmethod
    async def create(self, dto: CreateTagDTO) -> str:
        ...

    @abstractmethod
    async def find_one(self, uuid: str) -> Tag:
        ...

    @abstractmethod
    async def find_many(self, uuids: List[str]) -> List[Tag]:
        ...

    @abstractmethod
    async def update(self, uuid: str, dto: UpdateTagDTO) -> None:
        ...

    @abstractmethod
    async def delete(self, uuid: str) -> None:
        ...
