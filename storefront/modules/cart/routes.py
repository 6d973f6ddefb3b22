from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from storefront.database.supabase_client import get_supabase
from storefront.core.dependencies import require_buyer
from storefront.modules.cart.schemas import AddToCartRequest, CartResponse, UpdateCartItemRequest
from storefront.modules.cart.service import CartService
from supabase import Client
from typing import Any, Dict

router = APIRouter(prefix="/cart", tags=["cart"])


def get_cart_service(supabase: Client = Depends(get_supabase)) -> CartService:
    return CartService(supabase)


@router.get("", response_model=CartResponse)
async def get_cart(
    user_data: Dict = Depends(require_buyer),
    service: CartService = Depends(get_cart_service)
):
    """The current buyer's cart, newest lines first, with total and item count"""
    return service.get_cart(user_data["id"])


@router.post("", response_model=Dict[str, Any])
async def add_to_cart(
    data: AddToCartRequest,
    user_data: Dict = Depends(require_buyer),
    service: CartService = Depends(get_cart_service)
):
    """Add a product (or one of its variants); 201 for a new line, 200 when the quantity was bumped"""
    item, created = service.add_item(user_data["id"], data)
    return JSONResponse(status_code=201 if created else 200, content=item)


@router.patch("/{item_id}", response_model=Dict[str, Any])
async def update_cart_item(
    item_id: str,
    data: UpdateCartItemRequest,
    user_data: Dict = Depends(require_buyer),
    service: CartService = Depends(get_cart_service)
):
    return service.update_quantity(item_id, user_data["id"], data.quantity)


@router.delete("/{item_id}")
async def remove_cart_item(
    item_id: str,
    user_data: Dict = Depends(require_buyer),
    service: CartService = Depends(get_cart_service)
):
    service.remove_item(item_id, user_data["id"])
    return {"success": True}
