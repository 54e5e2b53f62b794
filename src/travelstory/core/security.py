"""Security utilities for authentication and authorization."""
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from .config import Settings


class TokenError(Exception):
    """Base exception for bearer token failures."""
    pass


class InvalidTokenError(TokenError):
    """Token is malformed, badly signed or carries no user id."""
    pass


class ExpiredTokenError(TokenError):
    """Token signature is valid but its lifetime has passed."""
    pass


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash
        rounds: bcrypt cost factor

    Returns:
        Hashed password string
    """
    # Bcrypt requires bytes and has 72-byte limit
    password_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Previously hashed password

    Returns:
        True if password matches, False otherwise
    """
    try:
        password_bytes = plain_password.encode("utf-8")[:72]
        hashed_bytes = hashed_password.encode("utf-8")
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except (ValueError, TypeError):
        return False


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens.

    The payload carries the user id under ``userId`` together with the
    standard ``iat`` and ``exp`` claims.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(settings.access_token_secret, settings.jwt_algorithm)

    def issue(self, user_id: int, ttl: timedelta) -> str:
        """Create a token for ``user_id`` that expires ``ttl`` from now.

        Args:
            user_id: Identifier of the authenticated user
            ttl: Token lifetime

        Returns:
            Encoded JWT string
        """
        now = datetime.now(UTC)
        to_encode: dict[str, Any] = {
            "userId": user_id,
            "iat": now,
            "exp": now + ttl,
        }
        encoded: str = jwt.encode(to_encode, self._secret, algorithm=self._algorithm)
        return encoded

    def verify(self, token: str) -> int:
        """Decode a token and return the user id it was issued for.

        Raises:
            ExpiredTokenError: If the token is past its expiry
            InvalidTokenError: If the token cannot be trusted
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
            )
        except ExpiredSignatureError as e:
            raise ExpiredTokenError("Token has expired") from e
        except JWTError as e:
            raise InvalidTokenError(f"Token validation failed: {e}") from e

        user_id = payload.get("userId")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError("Invalid token payload")
        return user_id
