"""Service layer: category and contact use cases and photo lifecycle."""

from .categories import CategoryService
from .contacts import ContactService
from .photos import ContactPhotoCoordinator, PhotoUpload

__all__ = [
    "CategoryService",
    "ContactService",
    "ContactPhotoCoordinator",
    "PhotoUpload",
]
