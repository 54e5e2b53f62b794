"""Authentication router for registration, login and the current user.

Registration issues a 48-hour token, login a 7-day one. Both are plain
bearer JWTs with no refresh flow.
"""

from datetime import timedelta

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from travelstory.api.deps import AppSettings, CurrentSession, Tokens, Users
from travelstory.api.schemas import CamelModel, UtcDatetime
from travelstory.core.exceptions import InvalidCredentialsError, NotFoundError, ValidationError
from travelstory.core.security import hash_password, verify_password

router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================


class RegisterRequest(CamelModel):
    """User registration request."""

    full_name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    """User login request."""

    email: str | None = None
    password: str | None = None


class UserSummary(CamelModel):
    full_name: str
    email: str


class AuthResponse(CamelModel):
    """Token response shared by registration and login."""

    error: bool = False
    message: str
    user: UserSummary
    access_token: str


class UserResponse(CamelModel):
    """User record as exposed by the API. The password hash never leaves."""

    id: int
    full_name: str
    email: str
    created_at: UtcDatetime


class CurrentUserResponse(BaseModel):
    user: UserResponse
    message: str = ""


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/create-account", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    request: RegisterRequest,
    users: Users,
    tokens: Tokens,
    settings: AppSettings,
) -> AuthResponse:
    """Register a new user and return a 48-hour access token.

    Raises:
        ValidationError: If any field is missing
        ConflictError: If the email is already registered
    """
    if not request.full_name or not request.email or not request.password:
        raise ValidationError("All fields are required")

    password_hash = await run_in_threadpool(
        hash_password, request.password, settings.bcrypt_rounds
    )
    user = await users.create(request.full_name, request.email, password_hash)

    access_token = tokens.issue(
        user.id, timedelta(hours=settings.registration_token_ttl_hours)
    )
    return AuthResponse(
        message="Registration Successful",
        user=UserSummary(full_name=user.full_name, email=user.email),
        access_token=access_token,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    users: Users,
    tokens: Tokens,
    settings: AppSettings,
) -> AuthResponse:
    """Login with email and password and return a 7-day access token.

    Raises:
        ValidationError: If email or password is missing
        NotFoundError: If no user has that email (reported as 400)
        InvalidCredentialsError: If the password does not match
    """
    if not request.email or not request.password:
        raise ValidationError("Email and password are required")

    user = await users.get_by_email(request.email)
    if user is None:
        raise NotFoundError("User not found", status_code=status.HTTP_400_BAD_REQUEST)

    valid = await run_in_threadpool(verify_password, request.password, user.password_hash)
    if not valid:
        raise InvalidCredentialsError("Invalid password")

    access_token = tokens.issue(user.id, timedelta(days=settings.login_token_ttl_days))
    return AuthResponse(
        message="Login Successful",
        user=UserSummary(full_name=user.full_name, email=user.email),
        access_token=access_token,
    )


@router.get("/get-user", response_model=CurrentUserResponse)
async def get_user(session: CurrentSession, users: Users):
    """Return the record of the user the bearer token was issued for.

    A token whose user no longer exists gets a bare 401.
    """
    user = await users.get_by_id(session.user_id)
    if user is None:
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)
    return CurrentUserResponse(user=UserResponse.model_validate(user))
