from fastapi import APIRouter, Depends, Query
from storefront.database.supabase_client import get_supabase
from storefront.core.dependencies import require_buyer
from storefront.modules.orders.schemas import OrderListResponse
from storefront.modules.orders.service import OrderService
from supabase import Client
from typing import Any, Dict

router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_service(supabase: Client = Depends(get_supabase)) -> OrderService:
    return OrderService(supabase)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user_data: Dict = Depends(require_buyer),
    service: OrderService = Depends(get_order_service)
):
    """List the current buyer's orders"""
    return service.list_orders(user_data["id"], page=page, limit=limit)


@router.get("/{order_id}", response_model=Dict[str, Any])
async def get_order(
    order_id: str,
    user_data: Dict = Depends(require_buyer),
    service: OrderService = Depends(get_order_service)
):
    """Get one of the current buyer's orders with items, payment and shipping"""
    return service.get_order_for_user(order_id, user_data["id"])
