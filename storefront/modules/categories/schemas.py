from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: str
    name: str
    slug: str
    parent_id: Optional[str] = None


class CategoryListResponse(BaseModel):
    categories: List[CategoryResponse]
