from fastapi import APIRouter, Depends
from storefront.database.supabase_client import get_supabase
from storefront.modules.categories.schemas import CategoryResponse, CategoryListResponse
from storefront.modules.categories.service import CategoryService
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/categories", tags=["categories"])


def get_category_service(supabase: Client = Depends(get_supabase)) -> CategoryService:
    return CategoryService(supabase)


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    parent_id: Optional[str] = None,
    service: CategoryService = Depends(get_category_service)
):
    """List all categories (public)"""
    return service.list_categories(parent_id=parent_id)


@router.get("/{slug}", response_model=CategoryResponse)
async def get_category(
    slug: str,
    service: CategoryService = Depends(get_category_service)
):
    """Get a category by slug"""
    return service.get_category(slug)
