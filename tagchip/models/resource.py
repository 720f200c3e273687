"""Resource model. Content published inside a project, private ones are gated by claims."""

import enum

from sqlalchemy import Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tagchip.models.asset import Asset
from tagchip.models.base import BaseModel
from tagchip.models.project import Project


class ResourceType(enum.Enum):
    VIDEO = "video"
    PLAYLIST = "playlist"
    DOC = "doc"
    BLOG_POST = "blog_post"


class ResourceAccess(enum.Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class Resource(BaseModel):
    __tablename__ = "resources"

    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    project: Mapped[Project] = relationship()
    name: Mapped[str]
    description: Mapped[str | None] = mapped_column(nullable=True)
    type: Mapped[ResourceType] = mapped_column(
        Enum(ResourceType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    access_type: Mapped[ResourceAccess] = mapped_column(
        Enum(ResourceAccess, values_callable=lambda e: [m.value for m in e]),
        default=ResourceAccess.PRIVATE,
        nullable=False,
    )
    # private only: empty means any claim in the project opens it
    required_asset_id: Mapped[int | None] = mapped_column(
        ForeignKey("assets.id"), nullable=True, index=True
    )
    required_asset: Mapped[Asset | None] = relationship()
