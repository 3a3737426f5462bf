# File: app/models/user.py

"""
User model.

A user owns an ordered list of places. The list is the "many" side of
Place.creator; removing a place from it deletes the place row.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from app.models.place import Place


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)

    # bcrypt hash, never serialized
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    # stored upload path, e.g. "uploads/images/<uuid>.png"
    image: Mapped[str] = mapped_column(String(1024), nullable=False)

    places: Mapped[list["Place"]] = relationship(
        back_populates="creator",
        cascade="all, delete-orphan",
        order_by="Place.created_at",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    @property
    def place_ids(self) -> list[str]:
        return [place.id for place in self.places]
