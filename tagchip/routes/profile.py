"""API routes for Profile and ProfileCard manipulation"""

from fastapi import APIRouter, Depends

from tagchip.middlewares.token import get_api_token
from tagchip.schemas.base import PaginationSchema
from tagchip.schemas.profile import (
    ProfileCardSchema,
    ProfileCardUpdateSchema,
    ProfileCreateSchema,
    ProfileFiltersSchema,
    ProfileSchema,
    ProfileUpdateSchema,
)
from tagchip.services.profile import ProfileService

profile_router = APIRouter(
    prefix="/profiles", tags=["Profiles"], dependencies=[Depends(get_api_token)]
)


@profile_router.post("/", response_model=ProfileSchema)
def create_profile(
    profile: ProfileCreateSchema,
    profile_service: ProfileService = Depends(),
):
    return profile_service.create(profile)


@profile_router.get("/{profile_id}", response_model=ProfileSchema)
def read_profile(
    profile_id: int,
    profile_service: ProfileService = Depends(),
):
    return profile_service.get(profile_id)


@profile_router.get("/", response_model=PaginationSchema[ProfileSchema])
def read_profiles(
    filters: ProfileFiltersSchema = Depends(),
    skip: int = 0,
    limit: int = 100,
    profile_service: ProfileService = Depends(),
):
    return profile_service.get_all(filters, skip, limit)


@profile_router.patch("/{profile_id}", response_model=ProfileSchema)
def update_profile(
    profile_id: int,
    profile_update: ProfileUpdateSchema,
    profile_service: ProfileService = Depends(),
):
    return profile_service.update(profile_id, profile_update)


@profile_router.put(
    "/{profile_id}/cards/{project_id}", response_model=ProfileCardSchema
)
def set_profile_card_username(
    profile_id: int,
    project_id: int,
    card: ProfileCardUpdateSchema,
    profile_service: ProfileService = Depends(),
):
    return profile_service.set_username(profile_id, project_id, card.username)
