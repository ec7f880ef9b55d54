"""Product management endpoints for the owner dashboard.

Products are the same records as items; these routes are what the
dashboard uses to manage them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_claims, get_product_service
from src.schemas.item import ItemCreate, ItemUpdate, MessageResponse, OwnedItemResponse
from src.services.item_service import ItemService
from src.services.tokens import TokenClaims

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[OwnedItemResponse])
def list_products(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    service: Annotated[ItemService, Depends(get_product_service)],
):
    """List the current user's products."""
    return service.list_mine(claims)


@router.post("", response_model=OwnedItemResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ItemCreate,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    service: Annotated[ItemService, Depends(get_product_service)],
):
    """Create a new product."""
    return service.create(product_data.model_dump(), claims)


@router.put("/{product_id}", response_model=OwnedItemResponse)
def update_product(
    product_id: str,
    product_data: ItemUpdate,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    service: Annotated[ItemService, Depends(get_product_service)],
):
    """Update the fields present in the body."""
    return service.update(product_id, claims, product_data.model_dump(exclude_unset=True))


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    service: Annotated[ItemService, Depends(get_product_service)],
):
    """Delete one of the current user's products."""
    return service.delete(product_id, claims)
