"""Stories router for the travel journal.

Every endpoint requires a bearer session. All reads and writes are scoped
to the caller's own stories, except ``/get-stories`` which lists every
user's stories.
"""

import logging
from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, field_validator

from travelstory.api.deps import AppSettings, CurrentSession, Images, Stories
from travelstory.api.schemas import CamelModel, UtcDatetime
from travelstory.core.exceptions import ValidationError
from travelstory.services.stories import parse_epoch_millis

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================


class StoryRequest(CamelModel):
    """Body shared by add and edit. Presence is checked per endpoint."""

    title: str | None = None
    story: str | None = None
    visited_location: list[str] | None = None
    image_url: str | None = None
    visited_date: int | str | None = None

    @field_validator("visited_location", mode="before")
    @classmethod
    def single_location_as_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            # An empty string counts as missing
            return [value] if value else None
        return value


class FavouriteRequest(CamelModel):
    is_favourite: bool | None = None


class StoryResponse(CamelModel):
    """Travel story information response."""

    id: int
    user_id: int
    title: str
    story: str
    visited_location: list[str]
    image_url: str
    visited_date: UtcDatetime
    is_favourite: bool
    created_at: UtcDatetime


class StoryEnvelope(BaseModel):
    story: StoryResponse
    message: str


class StoryListResponse(BaseModel):
    stories: list[StoryResponse]


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


def _visited_date(request: StoryRequest) -> datetime:
    try:
        return parse_epoch_millis(request.visited_date)
    except ValueError as e:
        raise ValidationError("Invalid visitedDate format") from e


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "/add-travel-story",
    response_model=StoryEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def add_travel_story(
    request: StoryRequest,
    session: CurrentSession,
    stories: Stories,
) -> StoryEnvelope:
    """Create a story owned by the caller.

    Raises:
        ValidationError: If a field is missing or visitedDate is not epoch milliseconds
    """
    if (
        not request.title
        or not request.story
        or request.visited_location is None
        or not request.image_url
        or request.visited_date in (None, "")
    ):
        raise ValidationError("All fields are required")

    visited_date = _visited_date(request)
    travel_story = await stories.add(
        user_id=session.user_id,
        title=request.title,
        story=request.story,
        visited_location=request.visited_location,
        image_url=request.image_url,
        visited_date=visited_date,
    )
    return StoryEnvelope(
        story=StoryResponse.model_validate(travel_story),
        message="Added successfully",
    )


@router.get("/get-all-stories", response_model=StoryListResponse)
async def get_all_stories(session: CurrentSession, stories: Stories) -> StoryListResponse:
    """List the caller's stories, favourites first."""
    travel_stories = await stories.list_for_user(session.user_id)
    return StoryListResponse(
        stories=[StoryResponse.model_validate(s) for s in travel_stories]
    )


@router.get("/get-stories", response_model=StoryListResponse)
async def get_stories(session: CurrentSession, stories: Stories) -> StoryListResponse:
    """List every user's stories, favourites first."""
    travel_stories = await stories.list_all()
    return StoryListResponse(
        stories=[StoryResponse.model_validate(s) for s in travel_stories]
    )


@router.put("/edit-story/{story_id}", response_model=StoryEnvelope)
async def edit_story(
    story_id: int,
    request: StoryRequest,
    session: CurrentSession,
    stories: Stories,
    settings: AppSettings,
) -> StoryEnvelope:
    """Overwrite an owned story. A missing imageUrl falls back to the placeholder.

    Raises:
        ValidationError: If a required field is missing or visitedDate is invalid
        NotFoundError: If the caller owns no story with this id
    """
    if (
        not request.title
        or not request.story
        or request.visited_location is None
        or request.visited_date in (None, "")
    ):
        raise ValidationError("All fields are required")

    visited_date = _visited_date(request)
    travel_story = await stories.edit(
        story_id,
        session.user_id,
        title=request.title,
        story=request.story,
        visited_location=request.visited_location,
        image_url=request.image_url or settings.placeholder_image_url,
        visited_date=visited_date,
    )
    return StoryEnvelope(
        story=StoryResponse.model_validate(travel_story),
        message="update success",
    )


@router.delete("/delete-story/{story_id}", response_model=MessageResponse)
async def delete_story(
    story_id: int,
    session: CurrentSession,
    stories: Stories,
    images: Images,
) -> MessageResponse:
    """Delete an owned story, then try to remove its image file.

    The record is deleted first. Image cleanup is best-effort: a missing
    or undeletable file is logged and does not change the response.

    Raises:
        NotFoundError: If the caller owns no story with this id
    """
    travel_story = await stories.delete(story_id, session.user_id)
    logger.info(f"Travel story {story_id} deleted for user {session.user_id}")

    await images.discard_by_url(travel_story.image_url)

    return MessageResponse(message="Travel story deleted successfully")


@router.put("/update-is-favourite/{story_id}", response_model=StoryEnvelope)
async def update_is_favourite(
    story_id: int,
    request: FavouriteRequest,
    session: CurrentSession,
    stories: Stories,
) -> StoryEnvelope:
    """Set or clear the favourite flag of an owned story."""
    if request.is_favourite is None:
        raise ValidationError("isFavourite is required")

    travel_story = await stories.set_favourite(story_id, session.user_id, request.is_favourite)
    return StoryEnvelope(
        story=StoryResponse.model_validate(travel_story),
        message="update success",
    )


@router.get("/search", response_model=StoryListResponse)
async def search_stories(
    session: CurrentSession,
    stories: Stories,
    query: str | None = None,
) -> StoryListResponse:
    """Case-insensitive substring search over title, story and locations.

    A missing query is reported as 404.
    """
    if not query:
        raise ValidationError("query is required", status_code=status.HTTP_404_NOT_FOUND)

    results = await stories.search(session.user_id, query)
    return StoryListResponse(stories=[StoryResponse.model_validate(s) for s in results])


@router.get("/travel-stories/filter", response_model=StoryListResponse)
async def filter_stories(
    session: CurrentSession,
    stories: Stories,
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
) -> StoryListResponse:
    """Stories visited between two epoch-millisecond bounds, inclusive.

    An unreadable bound matches nothing.
    """
    try:
        start = parse_epoch_millis(start_date)
        end = parse_epoch_millis(end_date)
    except ValueError:
        logger.debug(f"Unreadable date range {start_date!r}..{end_date!r}")
        return StoryListResponse(stories=[])

    results = await stories.filter_by_visited_date(session.user_id, start, end)
    return StoryListResponse(stories=[StoryResponse.model_validate(s) for s in results])
