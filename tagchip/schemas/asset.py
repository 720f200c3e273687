"""DTO for Asset"""

from tagchip.models.asset import AssetType
from tagchip.schemas.base import BaseFilterSchema, BaseReadSchema, BaseUpdateSchema


class AssetSchema(BaseReadSchema):
    project_id: int
    name: str
    description: str | None = None
    type: AssetType


class AssetCreateSchema(BaseUpdateSchema):
    project_id: int
    name: str
    description: str | None = None
    type: AssetType = AssetType.GENERIC


class AssetUpdateSchema(BaseUpdateSchema):
    name: str | None = None
    description: str | None = None
    type: AssetType | None = None


class AssetFiltersSchema(BaseFilterSchema):
    project_id: int | None = None
    name: str | None = None
    type: AssetType | None = None
