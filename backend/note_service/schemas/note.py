"""
Note Service — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract for notes.
How:   Routes decode request bodies into the DTOs below and serialize the
       Note view for responses. Storage converts documents into Note.
Who:   Used by routes, services and storage.

Field presence on partial updates:
    UpdateNoteDTO relies on pydantic's `model_fields_set`, which records the
    keys the client actually sent. That gives every field three states:

        absent       "tags" not in dto.model_fields_set
        null         "tags" in model_fields_set and dto.tags is None
        value        "tags" in model_fields_set and dto.tags == [...]

    so `{"tags": []}` (clear tags) and `{}` (leave tags alone) decode differently.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class Note(BaseModel):
    """
    What:  The Note view returned by GET /api/notes/{uuid} and GET /api/notes.
    Who:   Built by storage from persisted documents; never written by clients.
    """

    uuid: str = Field(description="Unique note identifier assigned by storage")
    header: str = Field(description="Note title")
    body: str = Field(description="Full note text")
    short_body: str = Field(description="Truncated form of body, derived by the server")
    category_uuid: str = Field(description="Identifier of the owning category")
    tags: List[str] = Field(default_factory=list, description="Ordered tag identifiers")
    created_at: Optional[datetime] = Field(default=None, description="Creation time (UTC)")
    updated_at: Optional[datetime] = Field(default=None, description="Last update time (UTC)")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreateNoteDTO(BaseModel):
    """
    What:  Input for POST /api/notes.

    short_body is not a field here: it is computed by NoteService from body,
    and a client-supplied "short_body" key is dropped with the other extras.
    """

    model_config = ConfigDict(extra="ignore")

    header: str
    body: str
    category_uuid: str
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_as_empty(cls, v):
        """A null tags value creates the note without tags."""
        return [] if v is None else v


class UpdateNoteDTO(BaseModel):
    """
    What:  Input for PATCH /api/notes/{uuid}. Every field is optional.

    Text fields count as changes only when present with a non-empty value;
    tags count as a change whenever the key is present (see module docstring).
    """

    model_config = ConfigDict(extra="ignore")

    header: Optional[str] = None
    body: Optional[str] = None
    category_uuid: Optional[str] = None
    tags: Optional[List[str]] = None

    @property
    def tags_present(self) -> bool:
        return "tags" in self.model_fields_set

    def text_changes(self) -> dict:
        """Present, non-empty text fields keyed by name."""
        changes = {}
        for name in ("header", "body", "category_uuid"):
            value = getattr(self, name)
            if name in self.model_fields_set and value:
                changes[name] = value
        return changes


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body shape produced by the exception handlers.

    Example:
        {"message": "not found", "developer_message": "note 'abc' was not found"}
    """

    message: str = Field(description="Human-readable error description")
    developer_message: str = Field(default="", description="Additional detail for API consumers")


class HealthResponse(BaseModel):
    """Returned by GET /health."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
