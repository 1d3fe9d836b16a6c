"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    MessageResponse,
    RegisterRequest,
    TokenIdentity,
    UserSummary,
)
from app.schemas.books import (
    BookCreate,
    BookDeletedResponse,
    BookListResponse,
    BookOut,
    BookResponse,
    BookUpdate,
)
from app.schemas.common import ErrorResponse, FieldErrorOut
from app.schemas.health import HealthResponse

__all__ = [
    "BookCreate",
    "BookDeletedResponse",
    "BookListResponse",
    "BookOut",
    "BookResponse",
    "BookUpdate",
    "ErrorResponse",
    "FieldErrorOut",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
    "MessageResponse",
    "RegisterRequest",
    "TokenIdentity",
    "UserSummary",
]
