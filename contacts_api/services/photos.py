"""Photo lifecycle management for contacts.

The coordinator keeps the stored photo object in step with the photo key
persisted on a Contact row:

* a new upload is always stored under a fresh key before anything else
  happens, and a failed store aborts the mutation;
* a superseded or released object is deleted only after the new one is
  durable, and a failed delete is logged and tolerated (the object is left
  orphaned rather than failing the request).
"""
import logging
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional

from contacts_api.storage.base import StorageBackend, StorageError
from contacts_api.storage.naming import generate_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhotoUpload:
    """An incoming photo: its content stream and client-side filename."""

    content: BinaryIO
    filename: str
    content_type: Optional[str] = None


class ContactPhotoCoordinator:
    """Decides when contact photos are stored, replaced and removed."""

    def __init__(
        self,
        storage: StorageBackend,
        key_generator: Callable[[str], str] = generate_key,
    ):
        """Initialize the coordinator.

        Args:
            storage: Backend holding the photo objects.
            key_generator: Produces a fresh storage key from a filename.
        """
        self.storage = storage
        self.key_generator = key_generator

    def resolve_key_for_create(self, upload: Optional[PhotoUpload]) -> Optional[str]:
        """Store the photo of a new contact.

        Args:
            upload: Photo sent with the create request, if any.

        Returns:
            Optional[str]: Key to persist on the contact, or None.

        Raises:
            StorageIOError: If the photo cannot be stored.
        """
        if upload is None:
            return None
        return self._store(upload)

    def resolve_key_for_update(
        self,
        existing_key: Optional[str],
        upload: Optional[PhotoUpload],
    ) -> Optional[str]:
        """Work out the photo key of an updated contact.

        Without an upload the existing key is returned untouched. With an
        upload the new photo is stored first and the previous object is
        deleted afterwards.

        Args:
            existing_key: Key currently persisted on the contact.
            upload: Photo sent with the update request, if any.

        Returns:
            Optional[str]: Key to persist on the contact.

        Raises:
            StorageIOError: If the new photo cannot be stored. The previous
                object is left untouched in that case.
        """
        if upload is None:
            return existing_key

        new_key = self._store(upload)
        if existing_key and existing_key != new_key:
            self.discard(existing_key)
        return new_key

    def release_on_delete(self, existing_key: Optional[str]) -> None:
        """Delete the photo of a removed contact, if it had one."""
        if not existing_key:
            return
        self.discard(existing_key)

    def discard(self, key: Optional[str]) -> None:
        """Delete an object that no contact references any more.

        Failures are logged and swallowed: an orphaned object is preferable
        to failing the surrounding mutation.
        """
        if not key:
            return
        try:
            self.storage.delete(key)
            logger.info(f"Deleted photo: {key}")
        except StorageError as e:
            logger.warning(f"Could not delete photo {key}, leaving it orphaned: {e}")

    def _store(self, upload: PhotoUpload) -> str:
        key = self.key_generator(upload.filename)
        logger.debug(f"Storing photo {upload.filename!r} as {key}")
        self.storage.store(key, upload.content, upload.filename)
        logger.info(f"Stored photo: {key}")
        return key
