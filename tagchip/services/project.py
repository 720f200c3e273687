"""Project service"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query

from tagchip.errors.project import ProjectHasTags, ProjectNameInUse
from tagchip.models.asset import Asset
from tagchip.models.profile import ProfileCard
from tagchip.models.project import Project
from tagchip.models.resource import Resource
from tagchip.models.tag import Tag
from tagchip.schemas.project import (
    ProjectCreateSchema,
    ProjectFiltersSchema,
    ProjectUpdateSchema,
)
from tagchip.services.base import BaseService

logger = logging.getLogger(__name__)


class ProjectService(BaseService[Project]):
    model = Project

    def _apply_filters(
        self, query: Query[Project], filters: ProjectFiltersSchema
    ) -> Query[Project]:
        if filters.name is not None:
            query = query.filter(self.model.name.ilike(f"%{filters.name}%"))
        if filters.type is not None:
            query = query.filter(self.model.type == filters.type)
        return query

    def _ensure_name_free(self, name: str, exclude_id: int | None = None) -> None:
        query = self.db.query(Project.id).filter(
            func.lower(Project.name) == func.lower(name)
        )
        if exclude_id is not None:
            query = query.filter(Project.id != exclude_id)
        if query.first() is not None:
            raise ProjectNameInUse(name)

    def create(self, schema: ProjectCreateSchema, overrides: dict = {}) -> Project:
        self._ensure_name_free(schema.name)
        try:
            project = super().create(schema, overrides)
        except IntegrityError:
            raise ProjectNameInUse(schema.name)
        logger.info("Project %s created (type=%s)", project.id, project.type.value)
        return project

    def update(
        self, obj_id: int, schema: ProjectUpdateSchema, overrides: dict = {}
    ) -> Project:
        if schema.name is not None:
            self._ensure_name_free(schema.name, exclude_id=obj_id)
        return super().update(obj_id, schema, overrides)

    def delete(self, obj_id: int) -> int:
        """Tags are never hard-deleted, so only a project without tags can go.

        Its resources, assets and profile cards are deleted with it.
        """
        project = self.get(obj_id)
        tags_count = self.db.query(Tag.id).filter(Tag.project_id == obj_id).count()
        if tags_count:
            raise ProjectHasTags(f"{tags_count} tag(s)")
        self.db.query(ProfileCard).filter(ProfileCard.project_id == obj_id).delete(
            synchronize_session=False
        )
        self.db.query(Resource).filter(Resource.project_id == obj_id).delete(
            synchronize_session=False
        )
        self.db.query(Asset).filter(Asset.project_id == obj_id).delete(
            synchronize_session=False
        )
        self.db.delete(project)
        self.db.flush()
        logger.info("Project %s deleted", obj_id)
        return obj_id
