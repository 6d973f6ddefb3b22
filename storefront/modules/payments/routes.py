"""
Browser-facing payment return callback.

The provider sends the shopper's browser here after checkout. This handler
only redirects: the shopper may close the tab before it runs, so payment
state is never written here. Authoritative payment updates belong to the
provider's server-to-server notification channel; the status endpoint
only reads the stored state back for the receipt page.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse
from storefront.config.settings import settings
from storefront.core.dependencies import require_buyer
from storefront.database.supabase_client import get_supabase
from supabase import Client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])

# Query parameters the provider may carry the merchant reference in, by preference
REFERENCE_PARAMS = ("merchant_reference_id", "merchantReferenceId", "session_id", "oxpay_txn_id", "txn_id")


def find_reference(request: Request) -> Optional[str]:
    for name in REFERENCE_PARAMS:
        value = request.query_params.get(name)
        if value:
            return value
    return None


def frontend_redirect(path: str) -> RedirectResponse:
    return RedirectResponse(f"{settings.frontend_url.rstrip('/')}{path}", status_code=307)


@router.get("/provider/return")
async def payment_return(request: Request):
    """Return callback after payment (UX redirect only)"""
    try:
        reference = find_reference(request)
        if not reference:
            logger.error("Payment return without a reference: %s", dict(request.query_params))
            return frontend_redirect("/checkout?error=missing_reference")

        logger.info(
            "Payment return for %s (provider status %s)",
            reference, request.query_params.get("status"),
        )
        return frontend_redirect(f"/checkout/receipt?ref={quote(reference, safe='')}")
    except Exception:
        logger.exception("Payment return handling failed")
        return frontend_redirect("/checkout?error=payment_return_error")


PAYMENT_STATUS_SELECT = (
    "*, "
    "orders(*, order_items(*, products(id, name, images), variants(id, name)))"
)


@router.get("/provider/status", response_model=Dict[str, Any])
async def payment_status(
    ref: Optional[str] = Query(None),
    user_data: Dict = Depends(require_buyer),
    supabase: Client = Depends(get_supabase)
):
    """Payment and order state for a merchant reference (read-only)"""
    if not ref:
        raise HTTPException(status_code=400, detail="Missing reference number")

    try:
        result = supabase.table("payments")\
            .select(PAYMENT_STATUS_SELECT)\
            .eq("provider_ref", ref)\
            .limit(1)\
            .execute()
    except Exception:
        logger.exception("Failed to look up payment %s", ref)
        raise HTTPException(status_code=500, detail="Internal server error")

    if not result.data:
        raise HTTPException(status_code=404, detail="Payment not found")

    payment = result.data[0]
    if (payment.get("orders") or {}).get("user_id") != user_data["id"]:
        raise HTTPException(status_code=403, detail="Forbidden")
    return payment
