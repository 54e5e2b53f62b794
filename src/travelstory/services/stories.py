"""Story store: persistence and queries for travel stories.

Every operation except ``list_all`` is scoped to the owning user, so one
user can never read or change another user's story through it. Listings
are favourites-first, then in insertion order.
"""

import re
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travelstory.core.exceptions import NotFoundError
from travelstory.models.story import TravelStory

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")

FAVOURITES_FIRST = (
    TravelStory.is_favourite.desc(),
    TravelStory.created_at.asc(),
    TravelStory.id.asc(),
)


def parse_epoch_millis(value: Any) -> datetime:
    """Convert an epoch-millisecond value into an aware UTC datetime.

    Accepts integers and strings. Strings are read like JavaScript's
    ``parseInt``: surrounding whitespace is ignored and the leading integer
    is used, so ``"1700000000000"`` parses and ``"not-a-number"`` does not.

    Raises:
        ValueError: If no integer can be read or it is out of datetime range
    """
    if isinstance(value, bool):
        raise ValueError(f"Not an epoch-millisecond timestamp: {value!r}")
    if isinstance(value, int):
        millis = value
    elif isinstance(value, str):
        match = _LEADING_INTEGER.match(value)
        if match is None:
            raise ValueError(f"Not an epoch-millisecond timestamp: {value!r}")
        millis = int(match.group(1))
    else:
        raise ValueError(f"Not an epoch-millisecond timestamp: {value!r}")

    try:
        return _EPOCH + timedelta(milliseconds=millis)
    except OverflowError as e:
        raise ValueError(f"Timestamp out of range: {millis}") from e


def matches_query(story: TravelStory, query: str) -> bool:
    """Case-insensitive substring match over title, story text and locations."""
    needle = query.lower()
    if needle in story.title.lower() or needle in story.story.lower():
        return True
    return any(needle in location.lower() for location in story.visited_location or [])


class StoryStore:
    """Persistence for travel stories."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(
        self,
        user_id: int,
        title: str,
        story: str,
        visited_location: list[str],
        image_url: str,
        visited_date: datetime,
    ) -> TravelStory:
        travel_story = TravelStory(
            user_id=user_id,
            title=title,
            story=story,
            visited_location=list(visited_location),
            image_url=image_url,
            visited_date=visited_date,
            is_favourite=False,
        )
        self.db.add(travel_story)
        await self.db.commit()
        await self.db.refresh(travel_story)
        return travel_story

    async def list_for_user(self, user_id: int) -> Sequence[TravelStory]:
        result = await self.db.execute(
            select(TravelStory)
            .where(TravelStory.user_id == user_id)
            .order_by(*FAVOURITES_FIRST)
        )
        return result.scalars().all()

    async def list_all(self) -> Sequence[TravelStory]:
        """Every user's stories, in the same order as ``list_for_user``."""
        result = await self.db.execute(select(TravelStory).order_by(*FAVOURITES_FIRST))
        return result.scalars().all()

    async def get_owned(self, story_id: int, user_id: int) -> TravelStory:
        """Fetch a story by id, provided ``user_id`` owns it.

        Raises:
            NotFoundError: If no such story belongs to the user
        """
        result = await self.db.execute(
            select(TravelStory).where(
                TravelStory.id == story_id,
                TravelStory.user_id == user_id,
            )
        )
        travel_story = result.scalar_one_or_none()
        if travel_story is None:
            raise NotFoundError("Travel Story not found")
        return travel_story

    async def edit(
        self,
        story_id: int,
        user_id: int,
        title: str,
        story: str,
        visited_location: list[str],
        image_url: str,
        visited_date: datetime,
    ) -> TravelStory:
        """Overwrite every mutable field of an owned story."""
        travel_story = await self.get_owned(story_id, user_id)
        travel_story.title = title
        travel_story.story = story
        travel_story.visited_location = list(visited_location)
        travel_story.image_url = image_url
        travel_story.visited_date = visited_date
        await self.db.commit()
        await self.db.refresh(travel_story)
        return travel_story

    async def set_favourite(self, story_id: int, user_id: int, is_favourite: bool) -> TravelStory:
        travel_story = await self.get_owned(story_id, user_id)
        travel_story.is_favourite = is_favourite
        await self.db.commit()
        await self.db.refresh(travel_story)
        return travel_story

    async def delete(self, story_id: int, user_id: int) -> TravelStory:
        """Remove an owned story and return the deleted row.

        Only the record is removed; cleaning up its image is the caller's
        follow-up step.
        """
        travel_story = await self.get_owned(story_id, user_id)
        await self.db.delete(travel_story)
        await self.db.commit()
        return travel_story

    async def search(self, user_id: int, query: str) -> list[TravelStory]:
        """Owned stories whose title, text or any location contains ``query``.

        Matching runs in Python over the user's stories, so locations are
        compared as decoded list elements rather than as stored JSON text.
        """
        result = await self.db.execute(
            select(TravelStory)
            .where(TravelStory.user_id == user_id)
            .order_by(*FAVOURITES_FIRST)
        )
        return [s for s in result.scalars().all() if matches_query(s, query)]

    async def filter_by_visited_date(
        self, user_id: int, start: datetime, end: datetime
    ) -> Sequence[TravelStory]:
        """Owned stories visited within ``[start, end]``, both bounds inclusive."""
        result = await self.db.execute(
            select(TravelStory)
            .where(
                TravelStory.user_id == user_id,
                TravelStory.visited_date >= start,
                TravelStory.visited_date <= end,
            )
            .order_by(*FAVOURITES_FIRST)
        )
        return result.scalars().all()
