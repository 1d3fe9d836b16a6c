"""Bearer-token gate for protected routes."""

import logging

import jwt
from pydantic import ValidationError as PydanticValidationError

from app.core.security import decode_access_token
from app.schemas.auth import TokenIdentity
from app.services.errors import InvalidTokenError, MalformedAuthError, MissingAuthError

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


class TokenGuard:
    """
    Validates an Authorization header and returns the identity in the token.

    The identity is trusted as signed: the user is not looked up again, so a
    token stays valid until it expires.
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    def extract_token(self, authorization: str | None) -> str:
        """Return the token from an exact "Bearer <token>" header value."""
        if not authorization:
            raise MissingAuthError()
        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
            raise MalformedAuthError()
        return parts[1]

    def authenticate(self, authorization: str | None) -> TokenIdentity:
        """
        Verify the header's token; raise MissingAuthError, MalformedAuthError or
        InvalidTokenError (all 401) on failure.
        """
        token = self.extract_token(authorization)
        try:
            payload = decode_access_token(token, self._secret, self._algorithm)
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            raise InvalidTokenError()
        except jwt.PyJWTError as e:
            logger.debug("Rejected invalid token: %s", type(e).__name__)
            raise InvalidTokenError()
        try:
            return TokenIdentity.model_validate(payload)
        except PydanticValidationError:
            logger.debug("Rejected token with unexpected claims")
            raise InvalidTokenError()
