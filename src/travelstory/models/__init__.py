"""Database models for Travel Story.

SQLAlchemy models for:
- Users
- Travel stories

All models use async SQLAlchemy (asyncpg for PostgreSQL, aiosqlite in tests).
"""

from .database import Base, Database
from .story import TravelStory
from .user import User

__all__ = [
    # Database
    "Base",
    "Database",
    # Models
    "User",
    "TravelStory",
]
