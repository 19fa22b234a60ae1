"""FastAPI dependency injection configuration."""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from config import StorageConfig, get_settings
from contacts_api.db import get_db
from contacts_api.repositories import CategoryDBRepository, ContactDBRepository
from contacts_api.services import CategoryService, ContactPhotoCoordinator, ContactService
from contacts_api.storage import StorageBackend, build_storage_backend

logger = logging.getLogger(__name__)


# Global instance for the storage backend, chosen once per process
_storage_backend: StorageBackend | None = None


def init_storage_backend(config: StorageConfig) -> StorageBackend:
    """Build the storage backend selected by configuration.

    Called from the application lifespan so that a misconfigured backend or
    an uncreatable directory fails startup instead of a request.
    """
    global _storage_backend
    _storage_backend = build_storage_backend(config)
    return _storage_backend


def get_storage_config() -> StorageConfig:
    return get_settings().storage_config()


def get_storage_backend() -> StorageBackend:
    """Get the process-wide storage backend, building it on first use."""
    if _storage_backend is None:
        return init_storage_backend(get_storage_config())
    return _storage_backend


def get_photo_coordinator(
    storage: StorageBackend = Depends(get_storage_backend),
) -> ContactPhotoCoordinator:
    return ContactPhotoCoordinator(storage)


def get_category_repository(db: Session = Depends(get_db)) -> CategoryDBRepository:
    return CategoryDBRepository(db)


def get_contact_repository(db: Session = Depends(get_db)) -> ContactDBRepository:
    return ContactDBRepository(db)


def get_category_service(
    repository: CategoryDBRepository = Depends(get_category_repository),
) -> CategoryService:
    return CategoryService(repository)


def get_contact_service(
    repository: ContactDBRepository = Depends(get_contact_repository),
    categories: CategoryService = Depends(get_category_service),
    photos: ContactPhotoCoordinator = Depends(get_photo_coordinator),
) -> ContactService:
    return ContactService(repository, categories, photos)
