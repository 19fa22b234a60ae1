"""SQLAlchemy database models."""

import uuid

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship

# Create the declarative base
Base = declarative_base()


class Category(Base):
    """Model representing a contact category.

    Category names are unique (exact match).
    """
    __tablename__ = "category"

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False
    )

    name = Column(String(255), nullable=False, unique=True)

    contacts = relationship("Contact", back_populates="category")

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"


class Contact(Base):
    """Model representing a contact.

    ``photo`` holds the storage key of the contact photo. The public photo
    URL is not stored; it is derived from the key on every read.
    """
    __tablename__ = "contact"

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False
    )

    name = Column(String(255), nullable=False)

    email = Column(String(255), nullable=False, unique=True)

    phone = Column(String(50), nullable=True)

    # Storage key of the photo, "<uuid4>_<original filename>"
    photo = Column(String(512), nullable=True)

    category_id = Column(
        UUID(as_uuid=True),
        ForeignKey("category.id"),
        nullable=False,
        index=True
    )

    category = relationship("Category", back_populates="contacts")

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, email={self.email}, photo={self.photo})>"
