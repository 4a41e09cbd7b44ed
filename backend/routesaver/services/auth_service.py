"""Auth Service — registration, login and bearer-token authentication.

Invariants:
    - Emails are matched case-insensitively (stored lower-cased)
    - Unknown email and wrong password produce the identical Unauthorized message
    - The password hash never leaves this module; callers get a UserSummary
    - register/login each mint a fresh token with the configured expiry

Design Decisions:
    - Duplicate email checked up front AND via the unique index: two concurrent
      registrations cannot both succeed, the loser gets Conflict
    - Unknown-email login still runs a hash check against a dummy hash so both
      failure paths cost the same
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from routesaver.core import messages
from routesaver.core.domain_types import UserId, UserSummary
from routesaver.core.errors import Conflict, ErrorContext, Unauthorized
from routesaver.core.validation import validate_login, validate_registration
from routesaver.infrastructure.security import (
    InvalidTokenError, TokenIssuer, hash_password, verify_password,
)
from routesaver.models.user import User

logger = logging.getLogger(__name__)

_DUMMY_HASH = hash_password(uuid.uuid4().hex)


def to_summary(user: User) -> UserSummary:
    return UserSummary(id=UserId(user.id), name=user.name, email=user.email)


class AuthService:
    """Credential checks and token issuance over one DB session."""

    def __init__(self, db: AsyncSession, tokens: TokenIssuer):
        self.db = db
        self.tokens = tokens

    async def register(
        self, name: str | None, email: str | None, password: str | None,
    ) -> tuple[str, UserSummary]:
        name, email, password = validate_registration(name, email, password)
        if await self._find_by_email(email):
            raise Conflict(messages.EMAIL_TAKEN)

        user = User(name=name, email=email, password_hash=hash_password(password))
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict(messages.EMAIL_TAKEN)
        await self.db.refresh(user)

        logger.info("User registered", extra={"user_id": str(user.id)})
        return self.tokens.issue(user.id), to_summary(user)

    async def login(
        self, email: str | None, password: str | None,
    ) -> tuple[str, UserSummary]:
        email, password = validate_login(email, password)
        user = await self._find_by_email(email)
        if user is None:
            verify_password(_DUMMY_HASH, password)
            raise Unauthorized(messages.INVALID_CREDENTIALS)
        if not verify_password(user.password_hash, password):
            raise Unauthorized(
                messages.INVALID_CREDENTIALS,
                ErrorContext(user_id=str(user.id)),
            )
        return self.tokens.issue(user.id), to_summary(user)

    async def authenticate(self, token: str | None) -> UserSummary:
        if not token:
            raise Unauthorized(messages.TOKEN_MISSING)
        try:
            user_id = self.tokens.verify(token)
        except InvalidTokenError:
            raise Unauthorized(messages.TOKEN_INVALID)

        user = await self.db.get(User, user_id)
        if user is None:
            raise Unauthorized(
                messages.USER_NOT_FOUND, ErrorContext(user_id=str(user_id)),
            )
        return to_summary(user)

    async def _find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
