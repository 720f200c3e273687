"""Profiles (owners, customers) and the public cards customers get per project"""

import enum

from sqlalchemy import Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tagchip.models.base import BaseModel


class ProfileRole(enum.Enum):
    OWNER = "owner"
    CUSTOMER = "customer"


class Profile(BaseModel):
    __tablename__ = "profiles"

    role: Mapped[ProfileRole] = mapped_column(
        Enum(ProfileRole, values_callable=lambda e: [m.value for m in e]),
        default=ProfileRole.CUSTOMER,
        nullable=False,
    )
    display_name: Mapped[str | None] = mapped_column(nullable=True)
    email: Mapped[str | None] = mapped_column(unique=True, nullable=True)

    cards: Mapped[list["ProfileCard"]] = relationship(back_populates="profile")


class ProfileCard(BaseModel):
    __tablename__ = "profile_cards"
    __table_args__ = (
        UniqueConstraint("profile_id", "project_id", name="uq_profile_cards_profile"),
        UniqueConstraint("project_id", "username", name="uq_profile_cards_username"),
    )

    profile_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), nullable=False)
    profile: Mapped[Profile] = relationship(back_populates="cards")
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # stays empty until the customer picks one, public url is /p/{username}
    username: Mapped[str | None] = mapped_column(nullable=True)
