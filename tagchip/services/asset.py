"""Asset service"""

from fastapi import Depends
from sqlalchemy.orm import Query, Session

from tagchip.errors.project import AssetIsBusy
from tagchip.models.asset import Asset
from tagchip.models.resource import Resource
from tagchip.models.tag import Tag
from tagchip.schemas.asset import AssetCreateSchema, AssetFiltersSchema
from tagchip.services.base import BaseService
from tagchip.services.project import ProjectService
from tagchip.uow import get_uow


class AssetService(BaseService[Asset]):
    model = Asset

    def __init__(
        self,
        db: Session = Depends(get_uow),
        project_service: ProjectService = Depends(),
    ):
        self.db = db
        self._project_service = project_service

    def _apply_filters(
        self, query: Query[Asset], filters: AssetFiltersSchema
    ) -> Query[Asset]:
        if filters.project_id is not None:
            query = query.filter(self.model.project_id == filters.project_id)
        if filters.name is not None:
            query = query.filter(self.model.name.ilike(f"%{filters.name}%"))
        if filters.type is not None:
            query = query.filter(self.model.type == filters.type)
        return query

    def create(self, schema: AssetCreateSchema, overrides: dict = {}) -> Asset:
        # raises NotFoundError for an unknown project
        self._project_service.get(schema.project_id)
        return super().create(schema, overrides)

    def delete(self, obj_id: int) -> int:
        self.get(obj_id)
        tags = self.db.query(Tag.id).filter(Tag.asset_id == obj_id).count()
        resources = (
            self.db.query(Resource.id)
            .filter(Resource.required_asset_id == obj_id)
            .count()
        )
        if tags or resources:
            raise AssetIsBusy(f"{tags} tag(s), {resources} resource(s)")
        return super().delete(obj_id)
