import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from storefront.core.dependencies import get_current_user
from storefront.modules.uploads.s3_storage import S3Storage, get_s3_storage
from storefront.modules.uploads.schemas import PresignRequest, PresignResponse
from typing import Dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


def build_upload_key(user_id: str, filename: str) -> str:
    """uploads/{user_id}/{uuid}.{ext}; the client's filename only contributes its extension"""
    _, dot, extension = filename.rpartition(".")
    if not dot or not extension:
        extension = "jpg"
    return f"uploads/{user_id}/{uuid.uuid4()}.{extension}"


def get_upload_storage() -> S3Storage:
    try:
        return get_s3_storage()
    except ValueError:
        logger.error("Upload presign requested but S3 is not configured")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/presign", response_model=PresignResponse)
async def presign_upload(
    upload: PresignRequest,
    user_data: Dict = Depends(get_current_user),
    storage: S3Storage = Depends(get_upload_storage)
):
    """Get a presigned URL for uploading an image straight to S3"""
    key = build_upload_key(user_data["id"], upload.filename)
    try:
        presigned_url = storage.generate_presigned_put(key, upload.content_type)
    except Exception:
        logger.exception("Failed to presign upload for user %s", user_data["id"])
        raise HTTPException(status_code=500, detail="Internal server error")

    return PresignResponse(
        presigned_url=presigned_url,
        key=key,
        public_url=storage.public_url(key),
        expires_in=storage.expires_in,
    )
