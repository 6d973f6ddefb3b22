import logging
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from fastapi import HTTPException
from supabase import Client

from storefront.core.ids import is_uuid
from storefront.modules.cart.schemas import AddToCartRequest, CartResponse

logger = logging.getLogger(__name__)

CART_SELECT = (
    "*, "
    "products(*, categories(*), seller_profiles(*, users(id, name, email))), "
    "variants(*)"
)

CENTS = Decimal("0.01")


def line_price(item: Dict[str, Any]) -> Decimal:
    """Unit price of a cart line: the variant's price when it has one, else the product's"""
    variant = item.get("variants") or {}
    price = variant.get("price")
    if price is None:
        price = (item.get("products") or {}).get("price") or 0
    return Decimal(str(price))


class CartService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_cart(self, user_id: str) -> CartResponse:
        try:
            result = self.supabase.table("cart_items")\
                .select(CART_SELECT)\
                .eq("user_id", user_id)\
                .order("added_at", desc=True)\
                .execute()
        except Exception:
            logger.exception("Failed to load cart for user %s", user_id)
            raise HTTPException(status_code=500, detail="Internal server error")

        items = result.data or []
        total = sum((line_price(item) * item["quantity"] for item in items), Decimal("0"))
        return CartResponse(
            items=items,
            total=str(total.quantize(CENTS)),
            item_count=sum(item["quantity"] for item in items),
        )

    def _fetch_one(self, table: str, column: str, value: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table(table)\
            .select("*")\
            .eq(column, value)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def _available_stock(self, product_id: str, variant_id: Optional[str]) -> int:
        if variant_id:
            variant = self._fetch_one("variants", "id", variant_id)
            return variant.get("stock", 0) if variant else 0
        product = self._fetch_one("products", "id", product_id)
        return product.get("stock", 0) if product else 0

    def add_item(self, user_id: str, data: AddToCartRequest) -> Tuple[Dict[str, Any], bool]:
        """Add a line or bump the quantity of an existing one; returns (row, created)"""
        try:
            product = self._fetch_one("products", "id", data.product_id) if is_uuid(data.product_id) else None
            if not product:
                raise HTTPException(status_code=404, detail="Product not found")

            if data.variant_id:
                variant = self._fetch_one("variants", "id", data.variant_id) if is_uuid(data.variant_id) else None
                if not variant or variant.get("product_id") != data.product_id:
                    raise HTTPException(status_code=404, detail="Variant not found")
                if variant.get("stock", 0) < data.quantity:
                    raise HTTPException(status_code=400, detail="Insufficient stock for variant")
            elif product.get("stock", 0) < data.quantity:
                raise HTTPException(status_code=400, detail="Insufficient stock")

            query = self.supabase.table("cart_items")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("product_id", data.product_id)
            if data.variant_id:
                query = query.eq("variant_id", data.variant_id)
            else:
                query = query.is_("variant_id", "null")
            existing = query.limit(1).execute()

            if existing.data:
                item = existing.data[0]
                result = self.supabase.table("cart_items")\
                    .update({"quantity": item["quantity"] + data.quantity})\
                    .eq("id", item["id"])\
                    .execute()
                return result.data[0], False

            result = self.supabase.table("cart_items").insert({
                "user_id": user_id,
                "product_id": data.product_id,
                "variant_id": data.variant_id,
                "quantity": data.quantity,
            }).execute()
            return result.data[0], True
        except HTTPException:
            raise
        except Exception:
            logger.exception("Failed to add product %s to cart of user %s", data.product_id, user_id)
            raise HTTPException(status_code=500, detail="Internal server error")

    def _owned_item(self, item_id: str, user_id: str) -> Dict[str, Any]:
        """Existence is checked before ownership: a missing line is 404, someone else's is 403"""
        item = self._fetch_one("cart_items", "id", item_id) if is_uuid(item_id) else None
        if not item:
            raise HTTPException(status_code=404, detail="Cart item not found")
        if item.get("user_id") != user_id:
            raise HTTPException(status_code=403, detail="Forbidden")
        return item

    def update_quantity(self, item_id: str, user_id: str, quantity: int) -> Dict[str, Any]:
        try:
            item = self._owned_item(item_id, user_id)
            if quantity > self._available_stock(item["product_id"], item.get("variant_id")):
                raise HTTPException(status_code=400, detail="Insufficient stock")
            result = self.supabase.table("cart_items")\
                .update({"quantity": quantity})\
                .eq("id", item_id)\
                .execute()
            return result.data[0]
        except HTTPException:
            raise
        except Exception:
            logger.exception("Failed to update cart item %s", item_id)
            raise HTTPException(status_code=500, detail="Internal server error")

    def remove_item(self, item_id: str, user_id: str) -> None:
        try:
            self._owned_item(item_id, user_id)
            self.supabase.table("cart_items").delete().eq("id", item_id).execute()
        except HTTPException:
            raise
        except Exception:
            logger.exception("Failed to remove cart item %s", item_id)
            raise HTTPException(status_code=500, detail="Internal server error")
