"""Item API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_claims, get_item_service
from src.schemas.item import ItemCreate, MessageResponse, OwnedItemResponse, PublicItemResponse
from src.services.item_service import ItemService
from src.services.tokens import TokenClaims

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=list[PublicItemResponse])
def list_items(
    service: Annotated[ItemService, Depends(get_item_service)],
    search: str | None = Query(default=None, description="Case-insensitive name substring"),
    category: str | None = Query(default=None, description="Category, any case"),
):
    """List all items, newest first."""
    return service.list_public(search=search, category=category)


# Registered before /{item_id} so "mine" is not taken for an id
@router.get("/mine", response_model=list[OwnedItemResponse])
def list_my_items(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    service: Annotated[ItemService, Depends(get_item_service)],
):
    """List the current user's items."""
    return service.list_mine(claims)


@router.get("/{item_id}", response_model=PublicItemResponse)
def get_item(
    item_id: str,
    service: Annotated[ItemService, Depends(get_item_service)],
):
    """Get an item's public details."""
    return service.get_public(item_id)


@router.post("", response_model=OwnedItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    item_data: ItemCreate,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    service: Annotated[ItemService, Depends(get_item_service)],
):
    """Create a new item owned by the current user."""
    return service.create(item_data.model_dump(), claims)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: str,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    service: Annotated[ItemService, Depends(get_item_service)],
):
    """Delete one of the current user's items."""
    return service.delete(item_id, claims)
