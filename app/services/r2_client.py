# app/services/r2_client.py
import logging
import re
import time
from functools import lru_cache
from typing import Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config import settings

logger = logging.getLogger(__name__)

# public object URLs look like {R2_PUBLIC_BASE}/object/public/{bucket}/{key}
FILE_REFERENCE_PATTERN = re.compile(r"/object/public/(.+?)/(.+)$")


class StorageError(Exception):
    pass


@lru_cache()
def get_s3_client():
    return boto3.client(
        "s3",
        endpoint_url=f"https://{settings.R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=settings.R2_ACCESS_KEY_ID,
        aws_secret_access_key=settings.R2_SECRET_ACCESS_KEY,
        region_name="auto"
    )


def build_object_key(filename: str, kind: str) -> str:
    """`1700000000000_script.zip` style keys, unique per upload."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    return f"{int(time.time() * 1000)}_{kind}.{ext}"


def public_url(key: str, bucket: Optional[str] = None) -> str:
    bucket = bucket or settings.R2_BUCKET_NAME
    return f"{settings.R2_PUBLIC_BASE.rstrip('/')}/object/public/{bucket}/{key}"


def parse_file_reference(file_url: str) -> Optional[Tuple[str, str]]:
    match = FILE_REFERENCE_PATTERN.search(file_url or "")
    if not match:
        return None
    return match.group(1), match.group(2)


def upload_to_r2(file, key: str, content_type: Optional[str]) -> str:
    try:
        get_s3_client().upload_fileobj(
            file,
            settings.R2_BUCKET_NAME,
            key,
            ExtraArgs={"ContentType": content_type or "application/octet-stream"}
        )
    except (BotoCoreError, ClientError) as e:
        logger.error("R2 upload failed for %s: %s", key, e)
        raise StorageError(str(e)) from e
    return public_url(key)


def create_signed_url(bucket: str, key: str, expires: int, filename: str) -> str:
    try:
        return get_s3_client().generate_presigned_url(
            "get_object",
            Params={
                "Bucket": bucket,
                "Key": key,
                "ResponseContentDisposition": f'attachment; filename="{filename}"',
            },
            ExpiresIn=expires
        )
    except (BotoCoreError, ClientError) as e:
        logger.error("Signing failed for %s/%s: %s", bucket, key, e)
        raise StorageError(str(e)) from e


def delete_from_r2(file_url: Optional[str]) -> bool:
    reference = parse_file_reference(file_url or "")
    if reference is None:
        return False

    bucket, key = reference
    try:
        get_s3_client().delete_object(Bucket=bucket, Key=key)
    except (BotoCoreError, ClientError):
        logger.exception("R2 delete failed for %s/%s", bucket, key)
        return False
    return True
