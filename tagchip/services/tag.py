"""Tag registry: creation, lookups and admin status toggles"""

import logging

from fastapi import Depends
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from tagchip.config import Config, get_config
from tagchip.errors.common import NotFoundError
from tagchip.errors.tag import (
    AssetProjectMismatch,
    InvalidTransition,
    PublicIdInUse,
    UidInUse,
)
from tagchip.identifiers import generate_public_id, normalize_uid, validate_public_id
from tagchip.models.asset import Asset
from tagchip.models.tag import Tag, TagClaim, TagStatus
from tagchip.notifier import ChangeEvent, queue_change
from tagchip.schemas.tag import TagCreateSchema, TagFiltersSchema
from tagchip.services.base import BaseService
from tagchip.services.project import ProjectService
from tagchip.uow import get_uow

logger = logging.getLogger(__name__)

# (from, to) pairs an admin may apply; claiming goes through ClaimService only
ADMIN_TRANSITIONS = {
    (TagStatus.ACTIVE, TagStatus.DISABLED),
    (TagStatus.DISABLED, TagStatus.ACTIVE),
    (TagStatus.CLAIMED, TagStatus.DISABLED),
}


class TagService(BaseService[Tag]):
    model = Tag

    def __init__(
        self,
        db: Session = Depends(get_uow),
        project_service: ProjectService = Depends(),
        config: Config = Depends(get_config),
    ):
        self.db = db
        self._project_service = project_service
        self.config = config

    def _apply_filters(
        self, query: Query[Tag], filters: TagFiltersSchema
    ) -> Query[Tag]:
        if filters.project_id is not None:
            query = query.filter(self.model.project_id == filters.project_id)
        if filters.asset_id is not None:
            query = query.filter(self.model.asset_id == filters.asset_id)
        if filters.status is not None:
            query = query.filter(self.model.status == filters.status)
        if filters.claim_mode is not None:
            query = query.filter(self.model.claim_mode == filters.claim_mode)
        if filters.public_id is not None:
            query = query.filter(self.model.public_id.ilike(f"%{filters.public_id}%"))
        if filters.nfc_uid is not None:
            query = query.filter(self.model.nfc_uid == normalize_uid(filters.nfc_uid))
        return query

    def get_by_public_id(self, public_id: str) -> Tag | None:
        """None is a normal answer here, callers turn it into a 404."""
        return self.db.query(Tag).filter(Tag.public_id == public_id).first()

    def public_id_taken(self, public_id: str) -> bool:
        return (
            self.db.query(Tag.id).filter(Tag.public_id == public_id).first()
            is not None
        )

    def uid_taken(self, nfc_uid: str) -> bool:
        return self.db.query(Tag.id).filter(Tag.nfc_uid == nfc_uid).first() is not None

    def get_claims(self, tag_id: int) -> list[TagClaim]:
        self.get(tag_id)
        return (
            self.db.query(TagClaim)
            .filter(TagClaim.tag_id == tag_id)
            .order_by(TagClaim.claimed_at.desc(), TagClaim.id.desc())
            .all()
        )

    def create(self, schema: TagCreateSchema, overrides: dict = {}) -> Tag:
        """Validate everything first, then insert once.

        Duplicates are checked up front for a clean error, but a concurrent
        insert can still slip between the check and the flush, in that case the
        unique constraints reject it and the violation is mapped to the same
        conflict errors.
        """
        project = self._project_service.get(schema.project_id)
        if schema.asset_id is not None:
            asset = self.db.get(Asset, schema.asset_id)
            if asset is None:
                raise NotFoundError(f"Asset id={schema.asset_id}")
            if asset.project_id != project.id:
                raise AssetProjectMismatch(
                    f"asset {asset.id} belongs to project {asset.project_id}"
                )
        nfc_uid = normalize_uid(schema.nfc_uid)
        public_id = None
        if schema.public_id:
            public_id = validate_public_id(schema.public_id)
        # raises UnsupportedClaimMode
        claim_mode = schema.get_claim_mode()

        if self.uid_taken(nfc_uid):
            raise UidInUse(nfc_uid)
        if public_id is not None:
            if self.public_id_taken(public_id):
                raise PublicIdInUse(public_id)
        else:
            public_id = generate_public_id(
                exists=self.public_id_taken,
                length=self.config.public_id_length,
                max_attempts=self.config.public_id_max_attempts,
            )

        tag = Tag(
            project_id=project.id,
            asset_id=schema.asset_id,
            public_id=public_id,
            nfc_uid=nfc_uid,
            claim_mode=claim_mode,
            status=TagStatus.ACTIVE,
            comment=schema.comment,
            **overrides,
        )
        self.db.add(tag)
        try:
            self.db.flush()
        except IntegrityError as exc:
            message = str(exc.orig)
            logger.info("Tag insert rejected by unique constraint: %s", message)
            if "nfc_uid" in message:
                raise UidInUse(nfc_uid)
            if "public_id" in message:
                raise PublicIdInUse(public_id)
            raise
        self.db.refresh(tag)
        queue_change(
            self.db,
            ChangeEvent("tags", "created", project_id=tag.project_id, tag_id=tag.id),
        )
        logger.info(
            "Tag %s created: public_id=%s project=%s mode=%s",
            tag.id,
            tag.public_id,
            tag.project_id,
            tag.claim_mode.value,
        )
        return tag

    def update(self, obj_id, schema, overrides={}):
        """project, uid, public id and claim mode are fixed, status has its own path"""
        raise NotImplementedError

    def delete(self, obj_id):
        """Tags are never hard-deleted, disable them instead"""
        raise NotImplementedError

    def set_status(self, tag_id: int, status: str | TagStatus) -> Tag:
        """Admin enable/disable. Claim history is left untouched.

        The write is conditional on the status we observed, so it can not
        silently overwrite a claim that committed in between.
        """
        tag = self.get(tag_id)
        try:
            target = TagStatus(status)
        except ValueError:
            raise InvalidTransition(f"unknown status {status!r}")
        current = tag.status
        if (current, target) not in ADMIN_TRANSITIONS:
            raise InvalidTransition(f"{current.value} -> {target.value}")

        result = self.db.execute(
            update(Tag)
            .where(Tag.id == tag_id, Tag.status == current)
            .values(status=target)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise InvalidTransition(
                f"{current.value} -> {target.value}, status changed concurrently"
            )
        self.db.flush()
        self.db.refresh(tag)
        queue_change(
            self.db,
            ChangeEvent(
                "tags", "status_changed", project_id=tag.project_id, tag_id=tag.id
            ),
        )
        logger.info("Tag %s status %s -> %s", tag.id, current.value, target.value)
        return tag
