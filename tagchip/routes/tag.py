"""API routes for Tag registry and admin status changes"""

from fastapi import APIRouter, Depends

from tagchip.middlewares.token import get_api_token
from tagchip.schemas.base import PaginationSchema
from tagchip.schemas.tag import (
    TagClaimSchema,
    TagCodeSchema,
    TagCreateSchema,
    TagFiltersSchema,
    TagSchema,
    TagStatusUpdateSchema,
)
from tagchip.services.claim_code import ClaimCodeService
from tagchip.services.tag import TagService

tag_router = APIRouter(
    prefix="/tags", tags=["Tags"], dependencies=[Depends(get_api_token)]
)


@tag_router.post("/", response_model=TagSchema)
def create_tag(
    tag: TagCreateSchema,
    tag_service: TagService = Depends(),
):
    return tag_service.create(tag)


@tag_router.get("/{tag_id}", response_model=TagSchema)
def read_tag(
    tag_id: int,
    tag_service: TagService = Depends(),
):
    return tag_service.get(tag_id)


@tag_router.get("/", response_model=PaginationSchema[TagSchema])
def read_tags(
    filters: TagFiltersSchema = Depends(),
    skip: int = 0,
    limit: int = 100,
    tag_service: TagService = Depends(),
):
    return tag_service.get_all(filters, skip, limit)


@tag_router.get("/{tag_id}/claims", response_model=list[TagClaimSchema])
def read_tag_claims(
    tag_id: int,
    tag_service: TagService = Depends(),
):
    return tag_service.get_claims(tag_id)


@tag_router.patch("/{tag_id}/status", response_model=TagSchema)
def update_tag_status(
    tag_id: int,
    status_update: TagStatusUpdateSchema,
    tag_service: TagService = Depends(),
):
    return tag_service.set_status(tag_id, status_update.status)


@tag_router.put("/{tag_id}/code", response_model=TagSchema)
def set_tag_code(
    tag_id: int,
    code: TagCodeSchema,
    code_service: ClaimCodeService = Depends(),
):
    return code_service.set_code(tag_id, code.code)
