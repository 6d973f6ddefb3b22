from pydantic import BaseModel
from typing import Any, Dict, List


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class OrderListResponse(BaseModel):
    orders: List[Dict[str, Any]]
    pagination: Pagination
