"""API routes for Resource manipulation and access checks"""

from fastapi import APIRouter, Depends

from tagchip.middlewares.token import get_api_token
from tagchip.schemas.base import PaginationSchema
from tagchip.schemas.resource import (
    ResourceAccessSchema,
    ResourceCreateSchema,
    ResourceFiltersSchema,
    ResourceSchema,
    ResourceUpdateSchema,
)
from tagchip.services.resource import ResourceService

resource_router = APIRouter(
    prefix="/resources", tags=["Resources"], dependencies=[Depends(get_api_token)]
)


@resource_router.post("/", response_model=ResourceSchema)
def create_resource(
    resource: ResourceCreateSchema,
    resource_service: ResourceService = Depends(),
):
    return resource_service.create(resource)


@resource_router.get("/{resource_id}", response_model=ResourceSchema)
def read_resource(
    resource_id: int,
    resource_service: ResourceService = Depends(),
):
    return resource_service.get(resource_id)


@resource_router.get("/", response_model=PaginationSchema[ResourceSchema])
def read_resources(
    filters: ResourceFiltersSchema = Depends(),
    skip: int = 0,
    limit: int = 100,
    resource_service: ResourceService = Depends(),
):
    return resource_service.get_all(filters, skip, limit)


@resource_router.patch("/{resource_id}", response_model=ResourceSchema)
def update_resource(
    resource_id: int,
    resource_update: ResourceUpdateSchema,
    resource_service: ResourceService = Depends(),
):
    return resource_service.update(resource_id, resource_update)


@resource_router.delete("/{resource_id}")
def delete_resource(
    resource_id: int,
    resource_service: ResourceService = Depends(),
) -> int:
    return resource_service.delete(resource_id)


@resource_router.get("/{resource_id}/access", response_model=ResourceAccessSchema)
def check_resource_access(
    resource_id: int,
    profile_id: int | None = None,
    resource_service: ResourceService = Depends(),
):
    """Whether `profile_id` (or an anonymous visitor) may open the resource"""
    return resource_service.check_access(resource_id, profile_id)
