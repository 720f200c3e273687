"""API routes for Asset manipulation"""

from fastapi import APIRouter, Depends

from tagchip.middlewares.token import get_api_token
from tagchip.schemas.asset import (
    AssetCreateSchema,
    AssetFiltersSchema,
    AssetSchema,
    AssetUpdateSchema,
)
from tagchip.schemas.base import PaginationSchema
from tagchip.services.asset import AssetService

asset_router = APIRouter(
    prefix="/assets", tags=["Assets"], dependencies=[Depends(get_api_token)]
)


@asset_router.post("/", response_model=AssetSchema)
def create_asset(
    asset: AssetCreateSchema,
    asset_service: AssetService = Depends(),
):
    return asset_service.create(asset)


@asset_router.get("/{asset_id}", response_model=AssetSchema)
def read_asset(
    asset_id: int,
    asset_service: AssetService = Depends(),
):
    return asset_service.get(asset_id)


@asset_router.get("/", response_model=PaginationSchema[AssetSchema])
def read_assets(
    filters: AssetFiltersSchema = Depends(),
    skip: int = 0,
    limit: int = 100,
    asset_service: AssetService = Depends(),
):
    return asset_service.get_all(filters, skip, limit)


@asset_router.patch("/{asset_id}", response_model=AssetSchema)
def update_asset(
    asset_id: int,
    asset_update: AssetUpdateSchema,
    asset_service: AssetService = Depends(),
):
    return asset_service.update(asset_id, asset_update)


@asset_router.delete("/{asset_id}")
def delete_asset(
    asset_id: int,
    asset_service: AssetService = Depends(),
) -> int:
    return asset_service.delete(asset_id)
