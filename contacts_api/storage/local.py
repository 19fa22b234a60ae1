"""Local filesystem implementation of StorageBackend."""
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from config import StorageConfig

from .base import (
    ObjectLocation,
    StorageBackend,
    StorageDeleteError,
    StorageError,
    StorageIOError,
    StorageNotFoundError,
)

logger = logging.getLogger(__name__)


class LocalDiskBackend(StorageBackend):
    """Local filesystem storage implementation.

    Stores each photo as a file named after its key directly under a
    configured root directory. Writes go to a hidden temporary file in the
    same directory which is then renamed over the target, so readers never
    observe a partially written photo.
    """

    def __init__(self, config: StorageConfig):
        """Initialize local storage backend.

        Args:
            config: Storage configuration; ``local_root`` is used as the
                root directory.

        Raises:
            StorageError: If the root directory cannot be created.
        """
        self.storage_root = Path(config.local_root).resolve()

        self._ensure_storage_dir()
        logger.info(f"Initialized LocalDiskBackend with root: {self.storage_root}")

    def _ensure_storage_dir(self) -> None:
        """Ensure the storage directory exists."""
        try:
            self.storage_root.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Ensured storage directory exists: {self.storage_root}")
        except OSError as e:
            logger.error(f"Failed to create storage directory: {e}")
            raise StorageError(f"Failed to create storage directory: {e}") from e

    def _resolve(self, key: str) -> Path:
        """Map a key to a file directly under the storage root."""
        if not key:
            raise ValueError("Storage key cannot be empty")

        file_path = (self.storage_root / key).resolve()
        if file_path.parent != self.storage_root:
            raise ValueError(f"Invalid storage key: {key}")
        return file_path

    def store(self, key: str, payload: BinaryIO, original_name: str) -> None:
        """Write the payload to ``<root>/<key>`` atomically.

        Raises:
            StorageIOError: If the file cannot be written.
        """
        file_path = self._resolve(key)
        tmp_path = None

        try:
            with tempfile.NamedTemporaryFile(
                dir=self.storage_root, prefix=".", suffix=".part", delete=False
            ) as tmp:
                tmp_path = Path(tmp.name)
                shutil.copyfileobj(payload, tmp)
            os.replace(tmp_path, file_path)
            logger.debug(f"Stored {original_name!r} at: {file_path}")
        except OSError as e:
            logger.error(f"Failed to store {original_name!r} as {key}: {e}")
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StorageIOError(
                f"Error storing file {original_name}, please try again"
            ) from e

    def retrieve(self, key: str) -> ObjectLocation:
        """Read the photo stored under ``key`` into memory.

        Raises:
            StorageNotFoundError: If the file does not exist.
            StorageIOError: If the file cannot be read.
        """
        file_path = self._resolve(key)

        if not file_path.exists():
            logger.warning(f"Photo not found: {key}")
            raise StorageNotFoundError(key)

        try:
            content = file_path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read photo from {file_path}: {e}")
            raise StorageIOError(f"The file {key} cannot be recovered") from e

        logger.debug(f"Successfully read photo from: {file_path}")
        return ObjectLocation(key=key, content=content)

    def delete(self, key: str) -> None:
        """Remove the file stored under ``key`` if present.

        Raises:
            StorageDeleteError: If the file exists but cannot be removed.
        """
        file_path = self._resolve(key)

        try:
            file_path.unlink(missing_ok=True)
            logger.debug(f"Deleted photo: {file_path}")
        except OSError as e:
            logger.error(f"Failed to delete photo {file_path}: {e}")
            raise StorageDeleteError(f"Error when deleting file {key}") from e
