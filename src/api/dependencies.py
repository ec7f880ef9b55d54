"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.errors import UnauthorizedError
from src.services.identity import IdentityService
from src.services.item_service import ItemService
from src.services.tokens import TokenClaims, decode_access_token

security = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Get the caller's identity from the bearer token.

    Verification is stateless; the user record is not loaded.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authorization token missing")
    return decode_access_token(credentials.credentials)


def get_identity_service(
    db: Annotated[Session, Depends(get_db)],
) -> IdentityService:
    """Get identity service with dependencies."""
    return IdentityService(db)


def get_item_service(
    db: Annotated[Session, Depends(get_db)],
) -> ItemService:
    """Get item service for the /items routes."""
    return ItemService(db, noun="item")


def get_product_service(
    db: Annotated[Session, Depends(get_db)],
) -> ItemService:
    """Get item service for the /products routes."""
    return ItemService(db, noun="product")
