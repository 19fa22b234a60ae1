"""Selection of the storage backend from configuration."""
import logging
from typing import Any, Optional

from config import StorageConfig

from .base import StorageBackend
from .local import LocalDiskBackend
from .object_store import ObjectStoreBackend

logger = logging.getLogger(__name__)


def build_storage_backend(config: StorageConfig, s3_client: Optional[Any] = None) -> StorageBackend:
    """Create the storage backend selected by ``config.backend``.

    Called once at startup. Creates the directories the backend needs,
    so failures here are startup failures.

    Args:
        config: Storage configuration.
        s3_client: Optional pre-built S3 client for the ``s3`` backend.

    Returns:
        StorageBackend: The configured backend.
    """
    if config.backend == "s3":
        logger.info(f"Using object storage backend (bucket={config.bucket_name})")
        return ObjectStoreBackend(config, client=s3_client)

    logger.info(f"Using local storage backend (root={config.local_root})")
    return LocalDiskBackend(config)
