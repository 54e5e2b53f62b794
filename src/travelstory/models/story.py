"""Travel story model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base
from .user import utcnow

if TYPE_CHECKING:
    from .user import User


class TravelStory(Base):
    """A single travel-journal entry owned by exactly one user."""

    __tablename__ = "travel_stories"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255))
    story: Mapped[str] = mapped_column(Text)
    visited_location: Mapped[list[str]] = mapped_column(JSON, default=list)
    image_url: Mapped[str] = mapped_column(String(1024))
    visited_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    is_favourite: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="stories", lazy="raise")

    def __repr__(self) -> str:
        return f"<TravelStory(id={self.id}, title='{self.title}')>"
