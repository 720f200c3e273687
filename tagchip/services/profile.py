"""Profile service, also manages the per-project profile cards"""

import logging
import re

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query

from tagchip.errors.common import NotFoundError
from tagchip.errors.profile import (
    ProfileCardsNotSupported,
    UsernameInUse,
    UsernameInvalid,
)
from tagchip.models.profile import Profile, ProfileCard, ProfileRole
from tagchip.models.project import Project, ProjectType
from tagchip.models.tag import Tag, TagClaim
from tagchip.schemas.profile import (
    ProfileFiltersSchema,
    ProfileSchema,
    ProjectCustomerSchema,
)
from tagchip.services.base import BaseService

logger = logging.getLogger(__name__)

USERNAME_RE = re.compile(r"^[A-Za-z0-9._-]{3,32}$")


def validate_username(username: str) -> str:
    username = (username or "").strip()
    if not USERNAME_RE.fullmatch(username):
        raise UsernameInvalid(repr(username))
    return username


class ProfileService(BaseService[Profile]):
    model = Profile

    def _apply_filters(
        self, query: Query[Profile], filters: ProfileFiltersSchema
    ) -> Query[Profile]:
        if filters.role is not None:
            query = query.filter(self.model.role == filters.role)
        if filters.email is not None:
            query = query.filter(self.model.email.ilike(f"%{filters.email}%"))
        if filters.display_name is not None:
            query = query.filter(
                self.model.display_name.ilike(f"%{filters.display_name}%")
            )
        return query

    def delete(self, obj_id):
        """Claims reference profiles and are never deleted"""
        raise NotImplementedError

    def get_card(self, profile_id: int, project_id: int) -> ProfileCard | None:
        return (
            self.db.query(ProfileCard)
            .filter(
                ProfileCard.profile_id == profile_id,
                ProfileCard.project_id == project_id,
            )
            .first()
        )

    def _ensure_username_free(self, project_id: int, username: str, card_id=None):
        query = self.db.query(ProfileCard.id).filter(
            ProfileCard.project_id == project_id, ProfileCard.username == username
        )
        if card_id is not None:
            query = query.filter(ProfileCard.id != card_id)
        if query.first() is not None:
            raise UsernameInUse(username)

    def ensure_card(
        self, profile: Profile, project: Project, username: str | None = None
    ) -> ProfileCard:
        """Get or create the card of `profile` in `project`.

        An existing username is never overwritten here, `set_username` does that.
        """
        if project.type != ProjectType.PROFILE_CARD:
            raise ProfileCardsNotSupported(f"project id={project.id}")
        if username is not None:
            username = validate_username(username)
        card = self.get_card(profile.id, project.id)
        if card is None:
            card = ProfileCard(profile_id=profile.id, project_id=project.id)
            self.db.add(card)
        if username and not card.username:
            self._ensure_username_free(project.id, username, card.id)
            card.username = username
        elif username and username != card.username:
            logger.info(
                "Profile %s keeps username %r in project %s, ignored %r",
                profile.id,
                card.username,
                project.id,
                username,
            )
        try:
            self.db.flush()
        except IntegrityError:
            raise UsernameInUse(username)
        return card

    def get_project_customers(self, project_id: int) -> list[ProjectCustomerSchema]:
        """
        Customers related to a project: holders of a card in it and claimants
        of any of its tags. Newest profiles first.
        """
        if self.db.get(Project, project_id) is None:
            raise NotFoundError(f"Project id={project_id}")

        claims_query = (
            select(
                TagClaim.claimed_by_profile_id,
                func.count(TagClaim.id).label("claims_count"),
            )
            .join(Tag, Tag.id == TagClaim.tag_id)
            .where(Tag.project_id == project_id)
            .group_by(TagClaim.claimed_by_profile_id)
        )
        claims_count: dict[int, int] = {
            row.claimed_by_profile_id: row.claims_count
            for row in self.db.execute(claims_query).all()
        }
        usernames: dict[int, str | None] = {
            card.profile_id: card.username
            for card in self.db.query(ProfileCard).filter(
                ProfileCard.project_id == project_id
            )
        }

        related = set(claims_count) | set(usernames)
        if not related:
            return []
        profiles = (
            self.db.query(Profile)
            .filter(Profile.id.in_(related), Profile.role == ProfileRole.CUSTOMER)
            .order_by(Profile.created_at.desc(), Profile.id.desc())
            .all()
        )
        return [
            ProjectCustomerSchema(
                profile=ProfileSchema.model_validate(profile),
                username=usernames.get(profile.id),
                claims_count=claims_count.get(profile.id, 0),
            )
            for profile in profiles
        ]

    def set_username(self, profile_id: int, project_id: int, username: str):
        profile = self.get(profile_id)
        project = self.db.get(Project, project_id)
        if project is None:
            raise NotFoundError(f"Project id={project_id}")
        username = validate_username(username)
        card = self.ensure_card(profile, project)
        self._ensure_username_free(project_id, username, card.id)
        card.username = username
        try:
            self.db.flush()
        except IntegrityError:
            raise UsernameInUse(username)
        self.db.refresh(card)
        logger.info(
            "Profile %s took username %r in project %s", profile_id, username, project_id
        )
        return card
