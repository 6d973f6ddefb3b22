import boto3
from botocore.exceptions import BotoCoreError, ClientError
from storefront.config.settings import Settings, settings
from typing import Any, Dict
import logging
import time

logger = logging.getLogger(__name__)


class S3Storage:
    def __init__(self, config: Settings = settings):
        if not config.s3_configured:
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            region_name=config.aws_region
        )
        self.bucket_name = config.s3_bucket_name
        self.region = config.aws_region
        self.expires_in = config.s3_presign_expires_in

    def generate_presigned_put(self, key: str, content_type: str) -> str:
        """Time-limited URL the browser can PUT the object to directly"""
        try:
            return self.s3_client.generate_presigned_url(
                'put_object',
                Params={
                    'Bucket': self.bucket_name,
                    'Key': key,
                    'ContentType': content_type
                },
                ExpiresIn=self.expires_in
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to presign S3 upload for {key}: {str(e)}")
            raise

    def public_url(self, key: str) -> str:
        # us-east-1 uses the legacy global endpoint without a region
        if self.region == "us-east-1":
            return f"https://{self.bucket_name}.s3.amazonaws.com/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"


def check_s3_connection(config: Settings = settings) -> Dict[str, Any]:
    """Report whether S3 is configured and a presigned URL can be produced"""
    if not config.s3_configured:
        return {"success": False, "message": "Missing AWS S3 configuration"}

    try:
        storage = S3Storage(config)
        storage.generate_presigned_put(f"test-{int(time.time() * 1000)}.txt", "text/plain")
    except (BotoCoreError, ClientError, ValueError) as e:
        return {
            "success": False,
            "message": f"S3 connection failed: {e}",
            "details": {"error": type(e).__name__},
        }

    return {
        "success": True,
        "message": "S3 connection successful",
        "details": {"region": config.aws_region, "bucket": config.s3_bucket_name},
    }


def get_s3_storage() -> S3Storage:
    return S3Storage(settings)
