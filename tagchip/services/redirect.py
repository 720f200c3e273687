"""Loads what the resolver needs for a scanned public id"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from tagchip.errors.tag import TagNotFound
from tagchip.models.profile import ProfileCard
from tagchip.models.project import ProjectType
from tagchip.resolver import Resolution, resolve
from tagchip.services.tag import TagService
from tagchip.uow import get_uow

logger = logging.getLogger(__name__)


class RedirectService:
    def __init__(
        self,
        db: Session = Depends(get_uow),
        tag_service: TagService = Depends(),
    ):
        self.db = db
        self._tag_service = tag_service

    def resolve(self, public_id: str) -> Resolution:
        tag = self._tag_service.get_by_public_id(public_id)
        if tag is None:
            raise TagNotFound(public_id)
        project = tag.project
        claims = list(tag.claims)

        usernames: dict[int, str | None] = {}
        if project.type == ProjectType.PROFILE_CARD and claims:
            claimant_ids = {c.claimed_by_profile_id for c in claims}
            cards = (
                self.db.query(ProfileCard)
                .filter(
                    ProfileCard.project_id == project.id,
                    ProfileCard.profile_id.in_(claimant_ids),
                )
                .all()
            )
            usernames = {card.profile_id: card.username for card in cards}

        resolution = resolve(tag, project, claims, usernames)
        logger.debug(
            "Resolved %s (status=%s) to %s", public_id, tag.status.value, resolution.url
        )
        return resolution
