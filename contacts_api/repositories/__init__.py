"""Repository implementations for data access."""

from .category import CategoryDBRepository
from .contact import ContactDBRepository
from .paging import Page

__all__ = [
    "CategoryDBRepository",
    "ContactDBRepository",
    "Page",
]
