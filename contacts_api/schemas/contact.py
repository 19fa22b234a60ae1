"""Contact-related Pydantic schemas."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import StorageConfig
from contacts_api.models.db import Contact
from contacts_api.storage.urls import photo_url

from .category import CategoryResponse


class ContactForm(BaseModel):
    """Contact fields sent as multipart form data on create and update."""

    name: str = Field(..., description="Contact name")
    email: str = Field(..., description="Contact email, unique among contacts")
    phone: Optional[str] = Field(None, description="Contact phone number")
    category_id: UUID = Field(..., description="Id of the contact's category")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Email is required")
        return v

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class ContactResponse(BaseModel):
    """A contact as returned by the API.

    ``photo`` is the storage key; ``photo_url`` is derived from it and the
    active storage backend and is never stored.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                    "name": "Ada Lovelace",
                    "email": "ada@example.com",
                    "phone": "555-0100",
                    "photo": "1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed_ada.png",
                    "photo_url": "/contacts/image/1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed_ada.png",
                    "category": {"id": "550e8400-e29b-41d4-a716-446655440000", "name": "Family"}
                }
            ]
        }
    )

    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    photo: Optional[str] = None
    photo_url: Optional[str] = None
    category: CategoryResponse

    @classmethod
    def from_contact(cls, contact: Contact, storage_config: StorageConfig) -> "ContactResponse":
        return cls(
            id=contact.id,
            name=contact.name,
            email=contact.email,
            phone=contact.phone,
            photo=contact.photo,
            photo_url=photo_url(contact.photo, storage_config),
            category=CategoryResponse.model_validate(contact.category),
        )


class ContactListResponse(BaseModel):
    """One page of contacts."""

    contacts: List[ContactResponse]
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
