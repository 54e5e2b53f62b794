"""FastAPI dependencies for dependency injection.

Provides the session guard, per-request database sessions and access to
the application-wide services built in ``create_app``.
"""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from travelstory.core.config import Settings
from travelstory.core.exceptions import UnauthorizedError
from travelstory.core.security import TokenError, TokenService
from travelstory.services.images import ImageStore
from travelstory.services.stories import StoryStore
from travelstory.services.users import UserStore

# Security scheme
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """Identity resolved from a verified bearer token."""

    user_id: int


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI - yields an async session for this request."""
    async with request.app.state.database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Database session dependency
DBSession = Annotated[AsyncSession, Depends(get_session)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
Images = Annotated[ImageStore, Depends(get_image_store)]


def get_user_store(db: DBSession) -> UserStore:
    return UserStore(db)


def get_story_store(db: DBSession) -> StoryStore:
    return StoryStore(db)


Users = Annotated[UserStore, Depends(get_user_store)]
Stories = Annotated[StoryStore, Depends(get_story_store)]


async def require_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Tokens,
) -> RequestContext:
    """Resolve the caller from the ``Authorization: Bearer`` header.

    Args:
        credentials: Bearer token from Authorization header
        tokens: Token service holding the signing secret

    Returns:
        Request context carrying the authenticated user id

    Raises:
        UnauthorizedError: If the header is absent or the token fails verification
    """
    if credentials is None:
        raise UnauthorizedError("Missing authentication token")

    try:
        user_id = tokens.verify(credentials.credentials)
    except TokenError as e:
        raise UnauthorizedError(str(e)) from e

    return RequestContext(user_id=user_id)


CurrentSession = Annotated[RequestContext, Depends(require_session)]
