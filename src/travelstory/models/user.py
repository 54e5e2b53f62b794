"""User model.

SQLAlchemy model for credential storage.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base

if TYPE_CHECKING:
    from .story import TravelStory


def utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """User account model.

    Email is unique at the schema level; the password is only ever stored
    as a bcrypt hash.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    full_name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )

    # Relationships
    stories: Mapped[list[TravelStory]] = relationship(
        "TravelStory",
        back_populates="user",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
