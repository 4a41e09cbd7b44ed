"""API Dependencies — service wiring and the authentication guard.

Invariants:
    - get_current_user runs before every protected handler; it either returns a
      UserSummary or raises Unauthorized (401), the handler never sees a bad token
    - Only the "Bearer <token>" scheme is accepted

Design Decisions:
    - Services built per request from the request's DB session (no shared state)
    - Token issuer built from settings on every call: get_settings() is cached,
      and tests can swap settings by overriding get_token_issuer
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from routesaver.config import get_settings
from routesaver.core.domain_types import UserSummary
from routesaver.infrastructure.database import get_db
from routesaver.infrastructure.security import TokenIssuer
from routesaver.services.auth_service import AuthService
from routesaver.services.route_service import RouteService

_BEARER_PREFIX = "Bearer "


def get_token_issuer() -> TokenIssuer:
    settings = get_settings()
    return TokenIssuer(
        settings.jwt_secret, settings.jwt_expires_in, settings.jwt_algorithm,
    )


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(db, tokens)


def get_route_service(db: AsyncSession = Depends(get_db)) -> RouteService:
    return RouteService(db)


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        return None
    return authorization[len(_BEARER_PREFIX):].strip() or None


async def get_current_user(
    authorization: str | None = Header(None),
    auth: AuthService = Depends(get_auth_service),
) -> UserSummary:
    """Resolve the bearer token to a user or short-circuit with 401."""
    return await auth.authenticate(extract_bearer_token(authorization))
