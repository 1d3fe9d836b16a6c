"""Registration, JWT login, and the bearer-token dependencies used by protected routes."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    MessageResponse,
    RegisterRequest,
    TokenIdentity,
    UserSummary,
)
from app.schemas.common import ErrorResponse
from app.services.auth import AuthService
from app.services.authorization import Capability, has_capability
from app.services.errors import ForbiddenError
from app.services.token_guard import TokenGuard

router = APIRouter()

AUTH_ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing, malformed, invalid or expired token"},
}


def get_auth_service(db: Annotated[Session, Depends(get_db)]) -> AuthService:
    """Dependency: AuthService bound to the request's DB session and the configured secret."""
    settings = get_settings()
    return AuthService(
        db,
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )


def get_token_guard() -> TokenGuard:
    settings = get_settings()
    return TokenGuard(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def get_current_identity(
    guard: Annotated[TokenGuard, Depends(get_token_guard)],
    authorization: Annotated[str | None, Header()] = None,
) -> TokenIdentity:
    """Dependency: require a valid "Bearer <token>" header and return its claims. Raises 401."""
    return guard.authenticate(authorization)


def require_capability(capability: Capability) -> Callable[..., TokenIdentity]:
    """Build a dependency that also checks the token's role grants capability (403 if not)."""

    def dependency(
        identity: Annotated[TokenIdentity, Depends(get_current_identity)],
    ) -> TokenIdentity:
        if not has_capability(identity.role, capability):
            raise ForbiddenError()
        return identity

    return dependency


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Create an account with role 'user'. Does not log the caller in."""
    service.register(body.username, body.email, body.password)
    return MessageResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = service.login(body.email, body.password)
    return LoginResponse(token=result.token, user=UserSummary.model_validate(result.user))


@router.get("/me", response_model=MeResponse, responses=AUTH_ERROR_RESPONSES)
def read_me(
    identity: Annotated[TokenIdentity, Depends(get_current_identity)],
) -> MeResponse:
    """Echo the claims of the presented token."""
    return MeResponse(user=identity)
