from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from storefront.config.settings import Settings, settings
from storefront.modules.uploads.s3_storage import check_s3_connection
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/test", tags=["diagnostics"])


def get_storage_settings() -> Settings:
    return settings


@router.get("/s3")
async def test_s3(config: Settings = Depends(get_storage_settings)):
    """Test S3 configuration by producing a presigned URL (for diagnostics)"""
    result = check_s3_connection(config)
    if not result["success"]:
        logger.warning("S3 diagnostic failed: %s", result["message"])
    return JSONResponse(status_code=200 if result["success"] else 500, content=result)
