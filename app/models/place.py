# File: app/models/place.py

"""
Place model.

Represents a single geotagged entry with an uploaded image. Every place has
exactly one creator, and appears in that creator's `places` list.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from app.models.user import User


class Place(Base):
    __tablename__ = "places"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False)
    address: Mapped[str] = mapped_column(String(1024), nullable=False)

    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)

    creator_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id"),
        index=True,
        nullable=False,
    )
    creator: Mapped["User"] = relationship(back_populates="places")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    @property
    def location(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}
