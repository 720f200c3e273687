"""Tag model: the logical record of a physical NFC chip, its claims and claim codes"""

import enum
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tagchip.models.asset import Asset
from tagchip.models.base import BaseModel
from tagchip.models.profile import Profile
from tagchip.models.project import Project


class ClaimMode(enum.Enum):
    CODE = "code"
    SECURE_TAP = "secure_tap"
    FIRST_TO_CLAIM = "first_to_claim"


class TagStatus(enum.Enum):
    ACTIVE = "active"
    DISABLED = "disabled"
    CLAIMED = "claimed"


def _utcnow() -> datetime:
    # naive UTC, same as every other timestamp column
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Tag(BaseModel):
    __tablename__ = "tags"
    __table_args__ = (
        UniqueConstraint("public_id", name="uq_tags_public_id"),
        UniqueConstraint("nfc_uid", name="uq_tags_nfc_uid"),
    )

    public_id: Mapped[str] = mapped_column(String(64), nullable=False)
    nfc_uid: Mapped[str] = mapped_column(nullable=False)

    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id"), nullable=False, index=True
    )
    project: Mapped[Project] = relationship()
    asset_id: Mapped[int | None] = mapped_column(
        ForeignKey("assets.id"), nullable=True
    )
    asset: Mapped[Asset | None] = relationship()

    claim_mode: Mapped[ClaimMode] = mapped_column(
        Enum(ClaimMode, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    status: Mapped[TagStatus] = mapped_column(
        Enum(TagStatus, values_callable=lambda e: [m.value for m in e]),
        default=TagStatus.ACTIVE,
        nullable=False,
    )

    claims: Mapped[list["TagClaim"]] = relationship(
        back_populates="tag", order_by="TagClaim.id"
    )


class TagClaim(BaseModel):
    """Append-only: a claim row is never updated or deleted."""

    __tablename__ = "tag_claims"

    tag_id: Mapped[int] = mapped_column(
        ForeignKey("tags.id"), nullable=False, index=True
    )
    tag: Mapped[Tag] = relationship(back_populates="claims")
    claimed_by_profile_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id"), nullable=False, index=True
    )
    claimed_by: Mapped[Profile] = relationship()
    claimed_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utcnow, nullable=False
    )


class TagCode(BaseModel):
    """Out-of-band claim code of a `code` mode tag, only the hash is kept."""

    __tablename__ = "tag_codes"

    tag_id: Mapped[int] = mapped_column(
        ForeignKey("tags.id"), nullable=False, unique=True
    )
    code_hash: Mapped[str] = mapped_column(String(64), nullable=False)
