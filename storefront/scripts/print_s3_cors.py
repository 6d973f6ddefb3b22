"""
S3 CORS Helper
Prints the CORS configuration the upload bucket needs so browsers can PUT to
presigned URLs.

Usage: python -m storefront.scripts.print_s3_cors
"""

import json
import logging
import sys
from typing import Any, Dict

from storefront.config.settings import Settings, settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

LOCAL_ORIGINS = ["http://localhost:3000", "https://localhost:3000", "http://127.0.0.1:3000"]


def build_cors_config(app_url: str) -> Dict[str, Any]:
    origins = list(LOCAL_ORIGINS)
    if app_url and app_url not in origins:
        origins.append(app_url)
    return {
        "CORSRules": [
            {
                "AllowedHeaders": ["*"],
                "AllowedMethods": ["GET", "PUT", "POST", "DELETE", "HEAD"],
                "AllowedOrigins": origins,
                "ExposeHeaders": ["ETag", "x-amz-request-id", "x-amz-id-2"],
                "MaxAgeSeconds": 3000,
            }
        ]
    }


def console_url(config: Settings) -> str:
    return (
        f"https://s3.console.aws.amazon.com/s3/buckets/{config.s3_bucket_name}"
        f"?region={config.aws_region}&tab=permissions"
    )


def main(config: Settings = settings) -> int:
    if not config.s3_bucket_name:
        logger.error("S3_BUCKET_NAME is not set")
        return 1

    cors = build_cors_config(config.frontend_url)
    logger.info(f"Bucket: {config.s3_bucket_name}")
    logger.info(f"Region: {config.aws_region}")
    logger.info(f"App URL: {config.frontend_url}")
    logger.info("Your S3 bucket CORS should match this configuration:\n" + json.dumps(cors, indent=2))
    logger.info(f"To verify or update it, open {console_url(config)} and edit 'Cross-origin resource sharing (CORS)'.")
    logger.info("For production, add your production domain to AllowedOrigins.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
