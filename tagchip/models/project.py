"""Project model. Owns assets and tags, decides where its tags redirect to."""

import enum

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from tagchip.models.base import BaseModel


class ProjectType(enum.Enum):
    PROFILE_CARD = "profile_card"
    EXCLUSIVE_CLUB = "exclusive_club"
    SIMPLE_REDIRECT = "simple_redirect"


class Project(BaseModel):
    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(unique=True)
    description: Mapped[str | None] = mapped_column(nullable=True)
    # fixed at creation, resolution rules depend on it
    type: Mapped[ProjectType] = mapped_column(
        Enum(ProjectType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    destination_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    # private resources open to every visitor, claim or not
    showroom_mode: Mapped[bool] = mapped_column(default=False)
