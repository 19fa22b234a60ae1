"""S3-compatible object storage implementation of StorageBackend."""
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Any, BinaryIO, Optional

import boto3
from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError

from config import StorageConfig

from .base import (
    ObjectLocation,
    StorageBackend,
    StorageDeleteError,
    StorageError,
    StorageIOError,
    media_type_for,
)

logger = logging.getLogger(__name__)

# Error codes S3 (and compatible services) use for a missing key
_MISSING_KEY_CODES = {"NoSuchKey", "NotFound", "404"}


def create_s3_client(config: StorageConfig) -> Any:
    """Build a boto3 S3 client from storage configuration.

    Explicit credentials are optional; without them boto3 falls back to
    its default credential chain (environment, profile, instance role).
    """
    extra = {} if config.endpoint_url is None else {"endpoint_url": config.endpoint_url}
    return boto3.client(
        "s3",
        region_name=config.region,
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        **extra,
    )


class ObjectStoreBackend(StorageBackend):
    """Object storage implementation backed by an S3 bucket.

    Uploads are staged through a temporary file under ``temp_dir`` before
    being sent to the bucket. Reads are never proxied: ``retrieve`` only
    builds the CDN URL the object is published under.
    """

    def __init__(self, config: StorageConfig, client: Optional[Any] = None):
        """Initialize the object store backend.

        Args:
            config: Storage configuration with bucket, CDN and staging settings.
            client: Pre-built S3 client. Built from ``config`` when omitted.

        Raises:
            ValueError: If no bucket name is configured.
            StorageError: If the staging directory cannot be created.
        """
        if not config.bucket_name:
            raise ValueError("S3_BUCKET_NAME must be set for s3 storage")

        self.bucket_name = config.bucket_name
        self.cdn_url = config.cdn_url
        self.temp_dir = Path(config.temp_dir)
        self._client = client if client is not None else create_s3_client(config)

        self._ensure_temp_dir()
        logger.info(
            f"Initialized ObjectStoreBackend with bucket: {self.bucket_name}, "
            f"staging: {self.temp_dir}"
        )

    def _ensure_temp_dir(self) -> None:
        try:
            self.temp_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create staging directory: {e}")
            raise StorageError(f"Failed to create staging directory: {e}") from e

    def store(self, key: str, payload: BinaryIO, original_name: str) -> None:
        """Stage the payload on disk and upload it to the bucket.

        The staging file is removed whether or not the upload succeeds.

        Raises:
            StorageIOError: If staging or uploading fails.
        """
        if not key:
            raise ValueError("Storage key cannot be empty")

        try:
            with tempfile.NamedTemporaryFile(dir=self.temp_dir, prefix="upload-") as staged:
                shutil.copyfileobj(payload, staged)
                staged.flush()
                staged.seek(0)
                self._client.upload_fileobj(
                    staged,
                    self.bucket_name,
                    key,
                    ExtraArgs={"ContentType": media_type_for(key)},
                )
        except OSError as e:
            logger.error(f"Failed to stage {original_name!r} for upload: {e}")
            raise StorageIOError(
                f"Error storing file {original_name}, please try again"
            ) from e
        except (Boto3Error, BotoCoreError, ClientError) as e:
            logger.error(f"Failed to upload {key} to bucket {self.bucket_name}: {e}")
            raise StorageIOError(
                f"Error storing file {original_name}, please try again"
            ) from e

        logger.debug(f"Uploaded {original_name!r} to s3://{self.bucket_name}/{key}")

    def retrieve(self, key: str) -> ObjectLocation:
        """Return the CDN URL for ``key``.

        Object existence is not checked; the CDN answers for missing keys.
        """
        if not key:
            raise ValueError("Storage key cannot be empty")
        return ObjectLocation(key=key, url=f"{self.cdn_url}{key}")

    def delete(self, key: str) -> None:
        """Delete ``key`` from the bucket; a missing key counts as deleted.

        Raises:
            StorageDeleteError: If the bucket rejects the request.
        """
        if not key:
            raise ValueError("Storage key cannot be empty")

        try:
            self._client.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in _MISSING_KEY_CODES:
                logger.debug(f"Object already absent: s3://{self.bucket_name}/{key}")
                return
            logger.error(f"Failed to delete s3://{self.bucket_name}/{key}: {e}")
            raise StorageDeleteError(f"Error when deleting file {key}") from e
        except BotoCoreError as e:
            logger.error(f"Failed to delete s3://{self.bucket_name}/{key}: {e}")
            raise StorageDeleteError(f"Error when deleting file {key}") from e

        logger.debug(f"Deleted s3://{self.bucket_name}/{key}")
