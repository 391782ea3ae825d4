"""
Note Service — Tags Route Handlers
===================================

Endpoints:
    GET    /api/tags/{uuid}         → 200 Tag
    GET    /api/tags?uuids=a,b,c    → 200 [Tag] in request order
    POST   /api/tags                → 201, Location: /api/tags/{uuid}
    PATCH  /api/tags/{uuid}         → 204
    DELETE /api/tags/{uuid}         → 204
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response
from pydantic import ValidationError

from note_service.database import get_tag_service
from note_service.exceptions import BadRequestError
from note_service.routes.notes import ERROR_RESPONSES, JSON_CONTENT_TYPE, require_uuid
from note_service.schemas.tag import CreateTagDTO, Tag, UpdateTagDTO
from note_service.services.tag_service import TagService

logger = logging.getLogger(__name__)

TAGS_URL = "/api/tags"

router = APIRouter(prefix=TAGS_URL, tags=["Tags"])


def parse_uuids(raw: str) -> List[str]:
    """Splits a comma separated list, dropping blanks and duplicates."""
    uuids: List[str] = []
    for part in raw.split(","):
        part = part.strip()
        if part and part not in uuids:
            uuids.append(part)
    if not uuids:
        raise BadRequestError("uuids query parameter is required and must be a comma separated list")
    return uuids


@router.get("/{uuid}", response_model=Tag, responses=ERROR_RESPONSES, summary="Get a tag")
async def get_tag(uuid: str, service: TagService = Depends(get_tag_service)) -> Tag:
    logger.info("GET TAG")
    return await service.get_one(require_uuid(uuid))


@router.get("", response_model=List[Tag], responses=ERROR_RESPONSES, summary="Get tags by uuids")
async def get_tags(
    uuids: str = Query(default="", description="Comma separated tag uuids"),
    service: TagService = Depends(get_tag_service),
) -> List[Tag]:
    logger.info("GET TAGS")
    return await service.get_by_uuids(parse_uuids(uuids))


@router.post("", status_code=201, responses=ERROR_RESPONSES, summary="Create a tag")
async def create_tag(request: Request, service: TagService = Depends(get_tag_service)) -> Response:
    logger.info("CREATE TAG")
    try:
        dto = CreateTagDTO.model_validate_json(await request.body())
    except ValidationError:
        raise BadRequestError("invalid data", developer_message="request body is not a valid tag")

    tag_uuid = await service.create(dto)
    return Response(
        status_code=201,
        headers={**JSON_CONTENT_TYPE, "Location": f"{TAGS_URL}/{tag_uuid}"},
    )


@router.patch("/{uuid}", status_code=204, responses=ERROR_RESPONSES, summary="Rename a tag")
async def partially_update_tag(
    uuid: str,
    request: Request,
    service: TagService = Depends(get_tag_service),
) -> Response:
    logger.info("PARTIALLY UPDATE TAG")
    tag_uuid = require_uuid(uuid)
    try:
        dto = UpdateTagDTO.model_validate_json(await request.body())
    except ValidationError:
        raise BadRequestError("invalid data", developer_message="request body is not a valid tag update")

    await service.update(tag_uuid, dto)
    return Response(status_code=204, headers=JSON_CONTENT_TYPE)


@router.delete("/{uuid}", status_code=204, responses=ERROR_RESPONSES, summary="Delete a tag")
async def delete_tag(uuid: str, service: TagService = Depends(get_tag_service)) -> Response:
    logger.info("DELETE TAG")
    await service.delete(require_uuid(uuid))
    return Response(status_code=204, headers=JSON_CONTENT_TYPE)
