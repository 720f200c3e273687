"""Asset model. An item inside a project, tags are bound to it and resources may require it."""

import enum

from sqlalchemy import Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tagchip.models.base import BaseModel
from tagchip.models.project import Project


class AssetType(enum.Enum):
    UNIQUE = "unique"
    GENERIC = "generic"


class Asset(BaseModel):
    __tablename__ = "assets"

    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    project: Mapped[Project] = relationship()
    name: Mapped[str]
    description: Mapped[str | None] = mapped_column(nullable=True)
    type: Mapped[AssetType] = mapped_column(
        Enum(AssetType, values_callable=lambda e: [m.value for m in e]),
        default=AssetType.GENERIC,
        nullable=False,
    )
