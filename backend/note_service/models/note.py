"""
Note Service — Note Document Model
===================================

What:  Shape of a note as persisted in the MongoDB `notes` collection, plus
       the conversions between documents and the Note view.
How:   Storage is the only caller; services and routes see DTOs and Note only.
Who:   Used by storage/note_storage.py.

Document layout:
    {
        "_id":           "3f2b...-uuid4",   # the public uuid
        "header":        "Shopping",
        "body":          "Milk, eggs, ...",
        "short_body":    "Milk, eggs, ...",
        "category_uuid": "c1",
        "tags":          ["t1", "t2"],
        "created_at":    ISODate(...),
        "updated_at":    ISODate(...)
    }

    Index on category_uuid serves GET /api/notes?category_uuid=...
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from note_service.schemas.note import CreateNoteDTO, Note

# Bodies longer than this are truncated into short_body
SHORT_BODY_LENGTH = 100
SHORT_BODY_SUFFIX = "..."

CATEGORY_INDEX = "category_uuid"


def generate_short_body(body: str, limit: int = SHORT_BODY_LENGTH) -> str:
    """
    Derive short_body from body.

    Bodies up to `limit` characters are returned unchanged; longer ones are cut
    at `limit`, trailing whitespace removed, and suffixed with "...".
    """
    if len(body) <= limit:
        return body
    return body[:limit].rstrip() + SHORT_BODY_SUFFIX


def new_document_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def note_to_document(dto: CreateNoteDTO, short_body: str) -> Dict[str, Any]:
    now = utc_now()
    return {
        "_id": new_document_id(),
        "header": dto.header,
        "body": dto.body,
        "short_body": short_body,
        "category_uuid": dto.category_uuid,
        "tags": list(dto.tags),
        "created_at": now,
        "updated_at": now,
    }


def document_to_note(document: Mapping[str, Any]) -> Note:
    return Note(
        uuid=str(document["_id"]),
        header=document.get("header", ""),
        body=document.get("body", ""),
        short_body=document.get("short_body", ""),
        category_uuid=document.get("category_uuid", ""),
        tags=list(document.get("tags") or []),
        created_at=document.get("created_at"),
        updated_at=document.get("updated_at"),
    )


def documents_to_notes(documents: List[Mapping[str, Any]]) -> List[Note]:
    return [document_to_note(document) for document in documents]
