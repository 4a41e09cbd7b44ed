"""Security — password hashing and bearer-token minting/verification.

Invariants:
    - Passwords stored only as salted hashes (werkzeug, scrypt by default)
    - Hash comparison is library-provided and constant-time; never ==
    - Tokens are HS256 JWTs carrying sub (user id), iat, exp
    - Every token failure (malformed, expired, bad signature, bad sub) is one
      InvalidTokenError for the caller

Design Decisions:
    - Stateless tokens, no revocation table: logout is client-side
    - TokenIssuer takes secret/expiry explicitly so tests can mint short-lived tokens
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Token could not be decoded or verified."""


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


class TokenIssuer:
    """Mints and verifies bearer tokens for a single signing secret."""

    def __init__(
        self, secret: str, expires_in: timedelta, algorithm: str = "HS256",
    ):
        self.secret = secret
        self.expires_in = expires_in
        self.algorithm = algorithm

    def issue(self, user_id: uuid.UUID, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> uuid.UUID:
        """Return the user id encoded in the token."""
        try:
            payload = jwt.decode(
                token, self.secret, algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
            return uuid.UUID(payload["sub"])
        except jwt.ExpiredSignatureError as e:
            logger.info("Expired token presented")
            raise InvalidTokenError("expired") from e
        except jwt.PyJWTError as e:
            logger.info(f"Rejected token: {e}")
            raise InvalidTokenError(str(e)) from e
        except (ValueError, TypeError) as e:
            raise InvalidTokenError("malformed subject") from e
