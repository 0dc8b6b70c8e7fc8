"""Authentication endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from game_night.core.security import create_access_token
from game_night.schemas.auth import LoginRequest, SignupRequest, TokenResponse, UserResponse
from game_night.services import accounts

from ..dependencies import OptionalUserDep, SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest, db: SessionDep) -> TokenResponse:
    """Create an account and sign it in."""
    user = accounts.create_user(
        db,
        email=payload.email,
        password=payload.password,
        name=payload.name,
    )
    return TokenResponse(access_token=create_access_token(user.id))


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: SessionDep) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    user = accounts.authenticate(db, email=payload.email, password=payload.password)
    return TokenResponse(access_token=create_access_token(user.id))


@router.get("/me", response_model=UserResponse | None)
async def logged_in_user(caller: OptionalUserDep) -> UserResponse | None:
    """Return the signed-in user, or ``null``."""
    if caller is None:
        return None
    return UserResponse.model_validate(caller)
