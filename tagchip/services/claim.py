"""Claim engine.

    active --claim--> claimed          (this service)
    active <--enable/disable--> disabled   (TagService.set_status)
    claimed --disable--> disabled

A claim is accepted only while the tag is active. The status flip is a
conditional UPDATE guarded by status='active' and the claim row is written in
the same transaction, so of two racing claims exactly one commits and the
other gets AlreadyClaimed.
"""

import logging

from fastapi import Depends
from sqlalchemy import update
from sqlalchemy.orm import Session

from tagchip.errors.claim import (
    AlreadyClaimed,
    ClaimantNotAllowed,
    ClaimModeProofFailed,
    InvalidClaimCode,
    TagDisabled,
)
from tagchip.errors.tag import TagNotFound, UnsupportedClaimMode
from tagchip.models.profile import Profile, ProfileRole
from tagchip.models.project import ProjectType
from tagchip.models.tag import ClaimMode, Tag, TagClaim, TagStatus
from tagchip.notifier import ChangeEvent, queue_change
from tagchip.schemas.tag import ClaimRequestSchema
from tagchip.services.claim_code import ClaimCodeService
from tagchip.services.profile import ProfileService, validate_username
from tagchip.services.secure_tap import SecureTapVerifier
from tagchip.services.tag import TagService
from tagchip.uow import get_uow

logger = logging.getLogger(__name__)


class ClaimService:
    def __init__(
        self,
        db: Session = Depends(get_uow),
        tag_service: TagService = Depends(),
        profile_service: ProfileService = Depends(),
        code_service: ClaimCodeService = Depends(),
        secure_tap_verifier: SecureTapVerifier = Depends(),
    ):
        self.db = db
        self._tag_service = tag_service
        self._profile_service = profile_service
        self._code_service = code_service
        self._secure_tap_verifier = secure_tap_verifier

    @staticmethod
    def _check_status(tag: Tag) -> None:
        match tag.status:
            case TagStatus.ACTIVE:
                return
            case TagStatus.DISABLED:
                raise TagDisabled(tag.public_id)
            case TagStatus.CLAIMED:
                raise AlreadyClaimed(tag.public_id)

    def _authorize(self, tag: Tag, proof: str | None) -> None:
        """Claim mode policy. Every mode must be listed here."""
        match tag.claim_mode:
            case ClaimMode.FIRST_TO_CLAIM:
                return
            case ClaimMode.SECURE_TAP:
                if not self._secure_tap_verifier.verify(tag, proof):
                    raise ClaimModeProofFailed(tag.public_id)
            case ClaimMode.CODE:
                if not self._code_service.verify(tag, proof):
                    raise InvalidClaimCode(tag.public_id)
            case _:
                raise UnsupportedClaimMode(repr(tag.claim_mode))

    def _commit_claim(self, tag: Tag, profile: Profile) -> TagClaim:
        result = self.db.execute(
            update(Tag)
            .where(Tag.id == tag.id, Tag.status == TagStatus.ACTIVE)
            .values(status=TagStatus.CLAIMED)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            # someone else changed the tag after we loaded it
            current = self.db.query(Tag.status).filter(Tag.id == tag.id).scalar()
            logger.info(
                "Claim of tag %s by profile %s lost the race (status=%s)",
                tag.id,
                profile.id,
                current,
            )
            if current == TagStatus.DISABLED:
                raise TagDisabled(tag.public_id)
            raise AlreadyClaimed(tag.public_id)

        claim = TagClaim(tag_id=tag.id, claimed_by_profile_id=profile.id)
        self.db.add(claim)
        self.db.flush()
        self.db.refresh(tag)
        self.db.refresh(claim)
        return claim

    def claim(self, public_id: str, schema: ClaimRequestSchema) -> TagClaim:
        tag = self._tag_service.get_by_public_id(public_id)
        if tag is None:
            raise TagNotFound(public_id)
        profile = self._profile_service.get(schema.profile_id)
        if profile.role != ProfileRole.CUSTOMER:
            raise ClaimantNotAllowed(f"profile {profile.id} is {profile.role.value}")

        if schema.username is not None:
            validate_username(schema.username)

        self._check_status(tag)
        self._authorize(tag, schema.proof)
        claim = self._commit_claim(tag, profile)

        if tag.project.type == ProjectType.PROFILE_CARD:
            self._profile_service.ensure_card(profile, tag.project, schema.username)

        queue_change(
            self.db,
            ChangeEvent("claims", "claimed", project_id=tag.project_id, tag_id=tag.id),
        )
        queue_change(
            self.db,
            ChangeEvent("tags", "claimed", project_id=tag.project_id, tag_id=tag.id),
        )
        logger.info(
            "Tag %s (%s) claimed by profile %s in %s mode",
            tag.id,
            tag.public_id,
            profile.id,
            tag.claim_mode.value,
        )
        return claim
