"""DTO for Resource and access checks"""

from typing import Literal

from tagchip.models.resource import ResourceAccess, ResourceType
from tagchip.schemas.base import (
    BaseFilterSchema,
    BaseReadSchema,
    BaseSchema,
    BaseUpdateSchema,
)
from tagchip.schemas.project import DestinationUrl


class ResourceSchema(BaseReadSchema):
    project_id: int
    name: str
    description: str | None = None
    type: ResourceType
    url: str | None = None
    access_type: ResourceAccess
    required_asset_id: int | None = None


class ResourceCreateSchema(BaseUpdateSchema):
    project_id: int
    name: str
    description: str | None = None
    type: ResourceType
    url: DestinationUrl = None
    access_type: ResourceAccess = ResourceAccess.PRIVATE
    required_asset_id: int | None = None


class ResourceUpdateSchema(BaseUpdateSchema):
    """Switching to public drops the required asset."""

    name: str | None = None
    description: str | None = None
    type: ResourceType | None = None
    url: DestinationUrl = None
    access_type: ResourceAccess | None = None
    required_asset_id: int | None = None


class ResourceFiltersSchema(BaseFilterSchema):
    project_id: int | None = None
    type: ResourceType | None = None
    access_type: ResourceAccess | None = None
    required_asset_id: int | None = None


class ResourceAccessSchema(BaseSchema):
    resource_id: int
    profile_id: int | None = None
    allowed: bool
    # what opened it, or "no_claim" when nothing did
    reason: Literal["public", "showroom", "claim", "no_claim"]
