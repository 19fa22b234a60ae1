"""Contact use cases."""
import logging
from typing import Optional
from uuid import UUID

from contacts_api.exceptions import EmailAlreadyInUseError, EntityNotFoundError
from contacts_api.models.db import Contact
from contacts_api.repositories.contact import ContactDBRepository
from contacts_api.repositories.paging import Page
from contacts_api.schemas.contact import ContactForm

from .categories import CategoryService
from .photos import ContactPhotoCoordinator, PhotoUpload

logger = logging.getLogger(__name__)


class ContactService:
    """Contact CRUD keeping photo objects in step with contact rows.

    Every lookup and uniqueness check runs before the photo coordinator is
    called, so a rejected request never writes to storage.
    """

    def __init__(
        self,
        repository: ContactDBRepository,
        categories: CategoryService,
        photos: ContactPhotoCoordinator,
    ):
        self.repository = repository
        self.categories = categories
        self.photos = photos

    def list(
        self,
        page: int = 0,
        size: int = 10,
        descending: bool = False,
        search: Optional[str] = None
    ) -> Page[Contact]:
        return self.repository.list(page=page, size=size, descending=descending, search=search)

    def find_by_id(self, contact_id: UUID) -> Contact:
        """Get a contact or raise EntityNotFoundError."""
        contact = self.repository.get(contact_id)
        if contact is None:
            raise EntityNotFoundError("Contact", contact_id)
        return contact

    def create(self, data: ContactForm, photo: Optional[PhotoUpload] = None) -> Contact:
        """Create a contact, storing its photo first when one is sent.

        Raises:
            EntityNotFoundError: If the category does not exist.
            EmailAlreadyInUseError: If another contact uses the email.
            StorageIOError: If the photo cannot be stored.
        """
        category = self.categories.find_by_id(data.category_id)

        if self.repository.find_by_email(data.email) is not None:
            raise EmailAlreadyInUseError()

        photo_key = self.photos.resolve_key_for_create(photo)

        contact = Contact(
            name=data.name,
            email=data.email,
            phone=data.phone,
            photo=photo_key,
            category=category,
        )
        try:
            contact = self.repository.save(contact)
        except Exception:
            # The row was not written, so nothing references the new photo
            self.photos.discard(photo_key)
            raise

        logger.info(f"Created contact {contact.id}")
        return contact

    def update(
        self,
        contact_id: UUID,
        data: ContactForm,
        photo: Optional[PhotoUpload] = None
    ) -> Contact:
        """Update a contact, replacing its photo when a new one is sent.

        Raises:
            EntityNotFoundError: If the contact or category does not exist.
            EmailAlreadyInUseError: If another contact uses the email.
            StorageIOError: If the new photo cannot be stored.
        """
        contact = self.find_by_id(contact_id)

        owner = self.repository.find_by_email(data.email)
        if owner is not None and owner.id != contact.id:
            raise EmailAlreadyInUseError()

        category = self.categories.find_by_id(data.category_id)

        previous_key = contact.photo
        photo_key = self.photos.resolve_key_for_update(previous_key, photo)

        contact.name = data.name
        contact.email = data.email
        contact.phone = data.phone
        contact.category = category
        contact.photo = photo_key
        try:
            contact = self.repository.save(contact)
        except Exception:
            if photo_key != previous_key:
                self.photos.discard(photo_key)
            raise

        logger.info(f"Updated contact {contact.id}")
        return contact

    def delete(self, contact_id: UUID) -> None:
        """Delete a contact and then release its photo.

        Raises:
            EntityNotFoundError: If the contact does not exist.
        """
        contact = self.find_by_id(contact_id)
        photo_key = contact.photo

        self.repository.delete(contact)
        self.photos.release_on_delete(photo_key)
        logger.info(f"Deleted contact {contact_id}")
