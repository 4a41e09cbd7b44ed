"""Auth Routes — register, login and current-user lookup.

Invariants:
    - register answers 201, login 200, both with {success, token, user}
    - /me requires a valid bearer token
"""

from fastapi import APIRouter, Depends, status

from routesaver.api.dependencies import get_auth_service, get_current_user
from routesaver.core.domain_types import UserSummary
from routesaver.schemas.auth import (
    AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserOut,
)
from routesaver.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest, auth: AuthService = Depends(get_auth_service),
):
    """Create an account and return a token for it."""
    token, user = await auth.register(body.name, body.email, body.password)
    return AuthResponse(token=token, user=UserOut.from_summary(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest, auth: AuthService = Depends(get_auth_service),
):
    token, user = await auth.login(body.email, body.password)
    return AuthResponse(token=token, user=UserOut.from_summary(user))


@router.get("/me", response_model=MeResponse)
async def me(user: UserSummary = Depends(get_current_user)):
    return MeResponse(user=UserOut.from_summary(user))
