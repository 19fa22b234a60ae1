"""Pydantic schemas for request/response validation."""

from .category import CategoryListResponse, CategoryRequest, CategoryResponse
from .contact import ContactForm, ContactListResponse, ContactResponse
from .error import ErrorResponse

__all__ = [
    "CategoryRequest",
    "CategoryResponse",
    "CategoryListResponse",
    "ContactForm",
    "ContactResponse",
    "ContactListResponse",
    "ErrorResponse",
]
