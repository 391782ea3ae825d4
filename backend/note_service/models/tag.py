"""
Note Service — Tag Document Model
==================================

What:  Shape of a tag in the MongoDB `tags` collection:
       {"_id": uuid4 string, "name": str, "created_at": ..., "updated_at": ...}
"""

from typing import Any, Dict, Mapping

from note_service.models.note import new_document_id, utc_now
from note_service.schemas.tag import CreateTagDTO, Tag


def tag_to_document(dto: CreateTagDTO) -> Dict[str, Any]:
    now = utc_now()
    return {
        "_id": new_document_id(),
        "name": dto.name,
        "created_at": now,
        "updated_at": now,
    }


def document_to_tag(document: Mapping[str, Any]) -> Tag:
    return Tag(
        uuid=str(document["_id"]),
        name=document.get("name", ""),
        created_at=document.get("created_at"),
        updated_at=document.get("updated_at"),
    )
