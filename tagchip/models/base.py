"""Base for all ORM models"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.inspection import inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class BaseModel(DeclarativeBase):
    # do not create separate table for this class
    __abstract__ = True

    # everything has an id, a comment and a creation time
    id: Mapped[int] = mapped_column(primary_key=True)
    comment: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), nullable=False
    )

    def __repr__(self):
        model_name = self.__class__.__name__
        attr_strs = [
            f"{attr}={getattr(self, attr)!r}"
            for attr in inspect(self.__class__).columns.keys()
        ]
        return f"<{model_name}({', '.join(attr_strs)})>"
