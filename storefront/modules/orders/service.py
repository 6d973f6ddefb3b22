import logging
import math
from typing import Any, Dict, Optional

from fastapi import HTTPException
from supabase import Client

from storefront.core.ids import is_uuid
from storefront.modules.orders.schemas import OrderListResponse, Pagination

logger = logging.getLogger(__name__)

USER_SUMMARY = "users(id, name, email)"

ORDER_DETAIL_SELECT = (
    "*, "
    f"order_items(*, products(*, categories(*), seller_profiles(*, {USER_SUMMARY})), variants(*)), "
    "payments(*), shippings(*), "
    f"{USER_SUMMARY}"
)

ORDER_LIST_SELECT = (
    "*, "
    "order_items(*, products(*, categories(*)), variants(*)), "
    "payments(*), shippings(*)"
)


class OrderService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        """Fetch an order with its items, product details, payment and shipping"""
        result = self.supabase.table("orders")\
            .select(ORDER_DETAIL_SELECT)\
            .eq("id", order_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_order_for_user(self, order_id: str, user_id: str) -> Dict[str, Any]:
        """Existence is checked before ownership: a missing order is 404, someone else's is 403"""
        if not is_uuid(order_id):
            raise HTTPException(status_code=404, detail="Order not found")

        try:
            order = self.get_order(order_id)
        except Exception:
            logger.exception("Failed to fetch order %s", order_id)
            raise HTTPException(status_code=500, detail="Internal server error")

        if not order:
            raise HTTPException(status_code=404, detail="Order not found")

        if order.get("user_id") != user_id:
            raise HTTPException(status_code=403, detail="Forbidden")

        return order

    def list_orders(self, user_id: str, page: int = 1, limit: int = 20) -> OrderListResponse:
        """List a user's orders, newest first"""
        offset = (page - 1) * limit
        try:
            result = self.supabase.table("orders")\
                .select(ORDER_LIST_SELECT, count="exact")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
        except Exception:
            logger.exception("Failed to list orders for user %s", user_id)
            raise HTTPException(status_code=500, detail="Internal server error")

        total = result.count or 0
        return OrderListResponse(
            orders=result.data or [],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                pages=math.ceil(total / limit),
            ),
        )
