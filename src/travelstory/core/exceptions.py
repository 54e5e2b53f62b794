"""Error types raised by services and endpoints.

Each error carries the HTTP status it is reported with; the API layer
renders them in ``travelstory.api.exceptions``.
"""


class APIError(Exception):
    """Base API error."""

    default_status = 400

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code or self.default_status
        super().__init__(message)


class ValidationError(APIError):
    """Missing or malformed input."""

    default_status = 400


class UnauthorizedError(APIError):
    """Missing, invalid or expired bearer token."""

    default_status = 401

    def __init__(self, message: str = "Authentication required", status_code: int | None = None):
        super().__init__(message, status_code)


class NotFoundError(APIError):
    """Referenced user, story or image is absent."""

    default_status = 404


class ConflictError(APIError):
    """Resource conflict, e.g. an email that is already registered.

    The API reports conflicts as 400.
    """

    default_status = 400


class InvalidCredentialsError(APIError):
    """Password does not match the stored hash."""

    default_status = 400


class InternalError(APIError):
    """Unexpected store or filesystem failure."""

    default_status = 500
