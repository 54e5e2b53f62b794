"""Backend services for Travel Story.

Stores wrap one ``AsyncSession`` per request; the image store wraps the
upload directory.

Services:
- users: credential store
- stories: story store and its query semantics
- images: uploaded image files
"""

from .images import ImageStore
from .stories import StoryStore, matches_query, parse_epoch_millis
from .users import UserStore

__all__ = [
    "ImageStore",
    "StoryStore",
    "UserStore",
    "matches_query",
    "parse_epoch_millis",
]
