"""Storage module for contact photo persistence."""

from .base import (
    ObjectLocation,
    StorageBackend,
    StorageDeleteError,
    StorageError,
    StorageIOError,
    StorageNotFoundError,
)
from .factory import build_storage_backend
from .local import LocalDiskBackend
from .naming import generate_key
from .object_store import ObjectStoreBackend
from .urls import photo_url

__all__ = [
    "ObjectLocation",
    "StorageBackend",
    "StorageError",
    "StorageNotFoundError",
    "StorageIOError",
    "StorageDeleteError",
    "LocalDiskBackend",
    "ObjectStoreBackend",
    "build_storage_backend",
    "generate_key",
    "photo_url",
]
