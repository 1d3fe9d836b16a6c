"""Service-level errors. Each carries the HTTP status and short message the API returns."""

from typing import Any


class ServiceError(Exception):
    """Base for errors raised by services and converted to JSON responses in app.main."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class ValidationError(ServiceError):
    """Missing or invalid input on registration or book creation."""

    status_code = 400
    default_message = "Invalid input"


class DuplicateError(ServiceError):
    """Uniqueness violation (email or username already taken)."""

    status_code = 400
    default_message = "User already exists"


class InvalidCredentialsError(ServiceError):
    """Unknown email or wrong password; the two are deliberately indistinguishable."""

    status_code = 400
    default_message = "Invalid credentials"


class AuthError(ServiceError):
    """Base for bearer-token failures (401 with WWW-Authenticate)."""

    status_code = 401

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class MissingAuthError(AuthError):
    default_message = "NO_AUTH_HEADER"


class MalformedAuthError(AuthError):
    default_message = "MALFORMED_AUTH_HEADER"


class InvalidTokenError(AuthError):
    default_message = "TOKEN_INVALID_OR_EXPIRED"


class ForbiddenError(ServiceError):
    """Authenticated, but the token's role lacks the required capability."""

    status_code = 403
    default_message = "FORBIDDEN"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Book not found"


class InvalidInputError(ServiceError):
    """Malformed id or update data that fails the field rules."""

    status_code = 400
    default_message = "Invalid ID or update data"


class FetchFailedError(ServiceError):
    """Store fault while listing books; no partial results are returned."""

    status_code = 500
    default_message = "Failed to fetch books"
