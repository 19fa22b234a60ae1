"""Storage backend interface for contact photos."""

from dataclasses import dataclass
from typing import BinaryIO, Optional, Protocol, runtime_checkable


def media_type_for(key: str) -> str:
    """Guess the photo media type from a storage key."""
    return "image/png" if key.lower().endswith(".png") else "image/jpeg"


@dataclass(frozen=True)
class ObjectLocation:
    """Where a stored object can be read from.

    Exactly one of ``content`` (bytes served by this service) or ``url``
    (an external location the client should be sent to) is set.
    """

    key: str
    content: Optional[bytes] = None
    url: Optional[str] = None

    @property
    def media_type(self) -> str:
        return media_type_for(self.key)

    @property
    def is_remote(self) -> bool:
        return self.url is not None


@runtime_checkable
class StorageBackend(Protocol):
    """Abstract interface for named binary object storage.

    Implementations store photos on the local filesystem or in an
    S3-compatible bucket. Keys are opaque, flat names produced by
    ``contacts_api.storage.naming.generate_key``.
    """

    def store(self, key: str, payload: BinaryIO, original_name: str) -> None:
        """Write ``payload`` under ``key``.

        Either the object becomes fully readable under ``key`` or the call
        fails and nothing is left reachable under that key.

        Args:
            key: Storage key for the object.
            payload: Readable binary stream with the object content.
            original_name: Client-side filename, used for diagnostics.

        Raises:
            StorageIOError: If the object cannot be written.
        """
        ...

    def retrieve(self, key: str) -> ObjectLocation:
        """Locate the object stored under ``key``.

        Raises:
            StorageNotFoundError: If no object exists under ``key``.
            StorageIOError: If the object cannot be read.
        """
        ...

    def delete(self, key: str) -> None:
        """Remove the object under ``key``.

        Deleting a key that does not exist is not an error.

        Raises:
            StorageDeleteError: On a genuine I/O fault.
        """
        ...


class StorageError(Exception):
    """Base exception for storage-related errors."""
    pass


class StorageNotFoundError(StorageError):
    """No object exists under the requested key."""

    def __init__(self, key: str):
        super().__init__(f"Object not found: {key}")
        self.key = key


class StorageIOError(StorageError):
    """The storage medium failed while reading or writing an object."""
    pass


class StorageDeleteError(StorageIOError):
    """The storage medium failed while deleting an object."""
    pass
