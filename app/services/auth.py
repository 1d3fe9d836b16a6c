"""Auth service: user registration and password login that issues a JWT."""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import (
    DEFAULT_BCRYPT_ROUNDS,
    create_access_token,
    dummy_password_hash,
    hash_password,
    verify_password,
)
from app.models.user import User
from app.services.errors import DuplicateError, InvalidCredentialsError, ValidationError
from app.services.validation import normalize_email, validate_registration

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


@dataclass
class LoginResult:
    token: str
    user: User


class AuthService:
    """
    Registers and authenticates users against the users table.

    The signing secret and token lifetime are passed in rather than read from
    settings so the same service can be built for tests or scripts.
    """

    def __init__(
        self,
        db: Session,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ) -> None:
        self.db = db
        self._secret = secret
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._bcrypt_rounds = bcrypt_rounds

    def register(
        self,
        username: str | None,
        email: str | None,
        password: str | None,
        role: str = DEFAULT_ROLE,
    ) -> User:
        """
        Create a user with a bcrypt-hashed password. No token is issued.

        Raises ValidationError when a field is missing and DuplicateError when
        the email (or, via the unique index, the username) is taken.
        """
        result = validate_registration(username, email, password)
        if not result.ok:
            raise ValidationError("All fields required", errors=result.error_dicts())

        values = result.values
        existing = self.db.query(User).filter(User.email == values["email"]).first()
        if existing is not None:
            logger.info("Registration rejected: email already registered")
            raise DuplicateError()

        user = User(
            username=values["username"],
            email=values["email"],
            password_hash=hash_password(values["password"], rounds=self._bcrypt_rounds),
            role=role,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Concurrent registration or a username clash caught by the unique indexes.
            self.db.rollback()
            logger.info("Registration rejected by unique constraint")
            raise DuplicateError()
        self.db.refresh(user)
        logger.info("Registered user id=%s", user.id)
        return user

    def login(
        self,
        email: str | None,
        password: str | None,
        now: datetime | None = None,
    ) -> LoginResult:
        """
        Verify email and password and issue a signed token with id and role.

        Every failure raises the same InvalidCredentialsError.
        """
        normalized = normalize_email(email)
        user = None
        if normalized:
            user = self.db.query(User).filter(User.email == normalized).first()

        candidate = password if isinstance(password, str) else ""
        stored_hash = (
            user.password_hash
            if user is not None
            else dummy_password_hash(self._bcrypt_rounds)
        )
        password_ok = verify_password(candidate, stored_hash)
        if user is None or not candidate or not password_ok:
            logger.info("Login failed")
            raise InvalidCredentialsError()

        token = create_access_token(
            {"id": user.id, "role": user.role},
            secret=self._secret,
            algorithm=self._algorithm,
            expire_minutes=self._expire_minutes,
            now=now,
        )
        logger.info("Login succeeded for user id=%s", user.id)
        return LoginResult(token=token, user=user)
