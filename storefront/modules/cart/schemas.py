from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class AddToCartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId", min_length=1)
    variant_id: Optional[str] = Field(default=None, alias="variantId")
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(gt=0)


class CartResponse(BaseModel):
    items: List[Dict[str, Any]]
    total: str
    item_count: int = Field(serialization_alias="itemCount")
