"""Resource service and the access check for gated content"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Query, Session

from tagchip.errors.common import NotFoundError
from tagchip.errors.project import RequiredAssetOnPublic
from tagchip.errors.tag import AssetProjectMismatch
from tagchip.models.profile import Profile
from tagchip.models.resource import Resource, ResourceAccess
from tagchip.models.tag import Tag, TagClaim, TagStatus
from tagchip.resolver import latest_claim
from tagchip.schemas.resource import (
    ResourceAccessSchema,
    ResourceCreateSchema,
    ResourceFiltersSchema,
    ResourceUpdateSchema,
)
from tagchip.services.asset import AssetService
from tagchip.services.base import BaseService
from tagchip.services.project import ProjectService
from tagchip.uow import get_uow

logger = logging.getLogger(__name__)


class ResourceService(BaseService[Resource]):
    model = Resource

    def __init__(
        self,
        db: Session = Depends(get_uow),
        project_service: ProjectService = Depends(),
        asset_service: AssetService = Depends(),
    ):
        self.db = db
        self._project_service = project_service
        self._asset_service = asset_service

    def _apply_filters(
        self, query: Query[Resource], filters: ResourceFiltersSchema
    ) -> Query[Resource]:
        if filters.project_id is not None:
            query = query.filter(self.model.project_id == filters.project_id)
        if filters.type is not None:
            query = query.filter(self.model.type == filters.type)
        if filters.access_type is not None:
            query = query.filter(self.model.access_type == filters.access_type)
        if filters.required_asset_id is not None:
            query = query.filter(
                self.model.required_asset_id == filters.required_asset_id
            )
        return query

    def _check_required_asset(
        self, project_id: int, access_type: ResourceAccess, asset_id: int | None
    ) -> None:
        if asset_id is None:
            return
        if access_type != ResourceAccess.PRIVATE:
            raise RequiredAssetOnPublic(f"asset id={asset_id}")
        asset = self._asset_service.get(asset_id)
        if asset.project_id != project_id:
            raise AssetProjectMismatch(
                f"asset {asset_id} is in project {asset.project_id}"
            )

    def create(self, schema: ResourceCreateSchema, overrides: dict = {}) -> Resource:
        self._project_service.get(schema.project_id)
        self._check_required_asset(
            schema.project_id, schema.access_type, schema.required_asset_id
        )
        return super().create(schema, overrides)

    def update(
        self, obj_id: int, schema: ResourceUpdateSchema, overrides: dict = {}
    ) -> Resource:
        resource = self.get(obj_id)
        access_type = schema.access_type or resource.access_type
        if access_type == ResourceAccess.PUBLIC:
            if schema.required_asset_id is not None:
                raise RequiredAssetOnPublic(f"asset id={schema.required_asset_id}")
            overrides = {**overrides, "required_asset_id": None}
        else:
            self._check_required_asset(
                resource.project_id, access_type, schema.required_asset_id
            )
        return super().update(obj_id, schema, overrides)

    def check_access(
        self, resource_id: int, profile_id: int | None = None
    ) -> ResourceAccessSchema:
        """
        Decide whether a visitor may open a resource.

        Public resources and every resource of a showroom project are open.
        Otherwise the visitor must be the current holder of a claimed tag in
        the project, bound to the required asset when the resource names one.
        Disabled tags open nothing.
        """
        resource = self.get(resource_id)

        def result(allowed: bool, reason: str) -> ResourceAccessSchema:
            return ResourceAccessSchema(
                resource_id=resource.id,
                profile_id=profile_id,
                allowed=allowed,
                reason=reason,
            )

        if resource.access_type == ResourceAccess.PUBLIC:
            return result(True, "public")
        if resource.project.showroom_mode:
            return result(True, "showroom")
        if profile_id is None:
            return result(False, "no_claim")
        if self.db.get(Profile, profile_id) is None:
            raise NotFoundError(f"Profile id={profile_id}")

        query = (
            self.db.query(Tag)
            .join(Tag.claims)
            .filter(
                Tag.project_id == resource.project_id,
                Tag.status == TagStatus.CLAIMED,
                TagClaim.claimed_by_profile_id == profile_id,
            )
            .distinct()
        )
        if resource.required_asset_id is not None:
            query = query.filter(Tag.asset_id == resource.required_asset_id)
        for tag in query:
            holder = latest_claim(tag.claims)
            if holder is not None and holder.claimed_by_profile_id == profile_id:
                logger.debug(
                    "Resource %s opened for profile %s by tag %s",
                    resource.id,
                    profile_id,
                    tag.id,
                )
                return result(True, "claim")
        return result(False, "no_claim")
