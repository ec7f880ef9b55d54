"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, status

from src.api.dependencies import get_identity_service
from src.schemas.auth import AuthResponse, OAuthSync, UserLogin, UserRegister, UserResponse
from src.services.identity import IdentityService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    service: Annotated[IdentityService, Depends(get_identity_service)],
):
    """Register a new user."""
    user, token = service.register(user_data.name, user_data.email, user_data.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    service: Annotated[IdentityService, Depends(get_identity_service)],
):
    """Login with email and password."""
    user, token = service.login(credentials.email, credentials.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/oauth", response_model=AuthResponse)
def oauth_sync(
    identity: OAuthSync,
    service: Annotated[IdentityService, Depends(get_identity_service)],
    x_internal_key: Annotated[str | None, Header()] = None,
):
    """Sign in an OAuth identity, creating the account on first use."""
    user, token = service.oauth_sync(
        identity.email, identity.name, identity.provider, x_internal_key
    )
    return AuthResponse(user=UserResponse.model_validate(user), token=token)
