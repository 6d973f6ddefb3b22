import logging
from typing import Dict, List, Optional

from fastapi import HTTPException
from supabase import Client

from storefront.config.catalog_config import DEFAULT_CATEGORIES
from storefront.modules.categories.schemas import CategoryResponse, CategoryListResponse

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def ensure_default_categories(self, categories: List[Dict[str, str]] = DEFAULT_CATEGORIES) -> List[Dict[str, str]]:
        """Insert the categories whose slug is not present yet; returns the ones created"""
        slugs = [c["slug"] for c in categories]
        existing = self.supabase.table("categories")\
            .select("slug")\
            .in_("slug", slugs)\
            .execute()
        existing_slugs = {row["slug"] for row in existing.data or []}

        to_create = [c for c in categories if c["slug"] not in existing_slugs]
        if to_create:
            self.supabase.table("categories")\
                .upsert(to_create, on_conflict="slug", ignore_duplicates=True)\
                .execute()
            logger.info("Created categories: %s", ", ".join(c["slug"] for c in to_create))
        return to_create

    def list_categories(self, parent_id: Optional[str] = None) -> CategoryListResponse:
        """List categories by name; parent_id='' selects root categories"""
        try:
            self.ensure_default_categories()
            query = self.supabase.table("categories").select("*")
            if parent_id is not None:
                query = query.is_("parent_id", "null") if parent_id == "" else query.eq("parent_id", parent_id)
            result = query.order("name").execute()
            return CategoryListResponse(
                categories=[CategoryResponse(**row) for row in result.data or []]
            )
        except Exception:
            logger.exception("Failed to list categories")
            raise HTTPException(status_code=500, detail="Internal server error")

    def get_category(self, slug: str) -> CategoryResponse:
        try:
            result = self.supabase.table("categories")\
                .select("*")\
                .eq("slug", slug)\
                .limit(1)\
                .execute()
        except Exception:
            logger.exception("Failed to fetch category %s", slug)
            raise HTTPException(status_code=500, detail="Internal server error")

        if not result.data:
            raise HTTPException(status_code=404, detail="Category not found")
        return CategoryResponse(**result.data[0])
