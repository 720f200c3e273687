"""API routes for Project manipulation"""

from fastapi import APIRouter, Depends

from tagchip.middlewares.token import get_api_token
from tagchip.schemas.base import PaginationSchema
from tagchip.schemas.profile import ProjectCustomerSchema
from tagchip.schemas.project import (
    ProjectCreateSchema,
    ProjectFiltersSchema,
    ProjectSchema,
    ProjectUpdateSchema,
)
from tagchip.services.profile import ProfileService
from tagchip.services.project import ProjectService

project_router = APIRouter(
    prefix="/projects", tags=["Projects"], dependencies=[Depends(get_api_token)]
)


@project_router.post("/", response_model=ProjectSchema)
def create_project(
    project: ProjectCreateSchema,
    project_service: ProjectService = Depends(),
):
    return project_service.create(project)


@project_router.get("/{project_id}", response_model=ProjectSchema)
def read_project(
    project_id: int,
    project_service: ProjectService = Depends(),
):
    return project_service.get(project_id)


@project_router.get("/", response_model=PaginationSchema[ProjectSchema])
def read_projects(
    filters: ProjectFiltersSchema = Depends(),
    skip: int = 0,
    limit: int = 100,
    project_service: ProjectService = Depends(),
):
    return project_service.get_all(filters, skip, limit)


@project_router.patch("/{project_id}", response_model=ProjectSchema)
def update_project(
    project_id: int,
    project_update: ProjectUpdateSchema,
    project_service: ProjectService = Depends(),
):
    return project_service.update(project_id, project_update)


@project_router.delete("/{project_id}")
def delete_project(
    project_id: int,
    project_service: ProjectService = Depends(),
) -> int:
    return project_service.delete(project_id)


@project_router.get(
    "/{project_id}/customers", response_model=list[ProjectCustomerSchema]
)
def read_project_customers(
    project_id: int,
    profile_service: ProfileService = Depends(),
):
    return profile_service.get_project_customers(project_id)
