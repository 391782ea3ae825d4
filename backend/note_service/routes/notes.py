"""
Note Service — Notes Route Handlers
====================================

What:  HTTP surface of the note resource.
How:   Each handler validates its input, calls NoteService and builds the
       response. Errors are raised, never written: the exception handlers in
       middleware/errors.py pick the status code.

Endpoints:
    GET    /api/notes/{uuid}                → 200 Note
    GET    /api/notes?category_uuid=X       → 200 [Note]
    POST   /api/notes                       → 201, Location: /api/notes/{uuid}
    PATCH  /api/notes/{uuid}                → 204
    DELETE /api/notes/{uuid}                → 204

Request bodies are read raw and decoded by the DTOs, so malformed JSON is a
400 "invalid data" rather than FastAPI's 422.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response
from pydantic import ValidationError

from note_service.database import get_note_service
from note_service.exceptions import BadRequestError
from note_service.schemas.note import CreateNoteDTO, ErrorResponse, Note, UpdateNoteDTO
from note_service.services.note_service import NoteService

logger = logging.getLogger(__name__)

NOTES_URL = "/api/notes"
JSON_CONTENT_TYPE = {"Content-Type": "application/json"}

router = APIRouter(prefix=NOTES_URL, tags=["Notes"])

ERROR_RESPONSES = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    404: {"description": "Note not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


def require_uuid(value: str, name: str = "uuid") -> str:
    """Rejects blank identifiers with a bad request; others pass through as sent."""
    if not (value or "").strip():
        raise BadRequestError(f"{name} parameter is required")
    return value


@router.get(
    "/{uuid}",
    response_model=Note,
    responses=ERROR_RESPONSES,
    summary="Get a single note by uuid",
)
async def get_note(uuid: str, service: NoteService = Depends(get_note_service)) -> Note:
    logger.info("GET NOTE")
    note_uuid = require_uuid(uuid)
    return await service.get_one(note_uuid)


@router.get(
    "",
    response_model=List[Note],
    responses=ERROR_RESPONSES,
    summary="List the notes of a category",
    description="Responds 404 when the category has no notes.",
)
async def get_notes_by_category(
    category_uuid: str = Query(default="", description="Category to list notes for"),
    service: NoteService = Depends(get_note_service),
) -> List[Note]:
    logger.info("GET NOTES BY CATEGORY")
    category = require_uuid(category_uuid, name="category_uuid")
    return await service.get_by_category_uuid(category)


@router.post(
    "",
    status_code=201,
    responses={
        201: {"description": "Created; the Location header points at the new note"},
        400: {"description": "Malformed body", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(request: Request, service: NoteService = Depends(get_note_service)) -> Response:
    logger.info("CREATE NOTE")

    logger.debug("decode create note dto")
    raw = await request.body()
    try:
        dto = CreateNoteDTO.model_validate_json(raw)
    except ValidationError as e:
        logger.debug("invalid create note payload: %s", e.error_count())
        raise BadRequestError("invalid data", developer_message="request body is not a valid note")

    note_uuid = await service.create(dto)
    return Response(
        status_code=201,
        headers={**JSON_CONTENT_TYPE, "Location": f"{NOTES_URL}/{note_uuid}"},
    )


@router.patch(
    "/{uuid}",
    status_code=204,
    responses=ERROR_RESPONSES,
    summary="Partially update a note",
    description=(
        "Only fields present in the body are changed. Sending \"tags\": [] "
        "clears the tags; omitting \"tags\" leaves them untouched."
    ),
)
async def partially_update_note(
    uuid: str,
    request: Request,
    service: NoteService = Depends(get_note_service),
) -> Response:
    logger.info("PARTIALLY UPDATE NOTE")
    note_uuid = require_uuid(uuid)

    logger.debug("decode update note dto")
    raw = await request.body()
    try:
        dto = UpdateNoteDTO.model_validate_json(raw)
    except ValidationError:
        raise BadRequestError("invalid data", developer_message="request body is not a valid note update")

    logger.debug("tags present in payload: %s", dto.tags_present)
    await service.update(note_uuid, dto, dto.tags_present)
    return Response(status_code=204, headers=JSON_CONTENT_TYPE)


@router.delete(
    "/{uuid}",
    status_code=204,
    responses=ERROR_RESPONSES,
    summary="Delete a note",
)
async def delete_note(uuid: str, service: NoteService = Depends(get_note_service)) -> Response:
    logger.info("DELETE NOTE")
    note_uuid = require_uuid(uuid)
    await service.delete(note_uuid)
    return Response(status_code=204, headers=JSON_CONTENT_TYPE)
