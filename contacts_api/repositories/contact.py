"""SQLAlchemy-based repository for Contact entities."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import String, func, or_
from sqlalchemy.orm import Session, joinedload

from contacts_api.models.db import Contact
from contacts_api.text import remove_accents

from .paging import Page

logger = logging.getLogger(__name__)


class ContactDBRepository:
    """Repository for managing Contact entities in the database.

    Only rows are handled here; photo objects are managed by
    ``ContactPhotoCoordinator``.
    """

    def __init__(self, db: Session):
        """Initialize the repository with a database session.

        Args:
            db: SQLAlchemy session for database operations
        """
        self.db = db

    def list(
        self,
        page: int = 0,
        size: int = 10,
        descending: bool = False,
        search: Optional[str] = None
    ) -> Page[Contact]:
        """List contacts ordered by name.

        The search term matches the name ignoring accents and case, or the
        email or phone ignoring case.
        """
        query = self.db.query(Contact).options(joinedload(Contact.category))

        if search:
            folded = remove_accents(search).lower()
            lowered = search.lower()
            name = func.lower(func.unaccent(Contact.name, type_=String))
            query = query.filter(
                or_(
                    name.contains(folded, autoescape=True),
                    func.lower(Contact.email).contains(lowered, autoescape=True),
                    func.lower(Contact.phone).contains(lowered, autoescape=True),
                )
            )

        total = query.count()
        order = Contact.name.desc() if descending else Contact.name.asc()
        items = query.order_by(order).offset(page * size).limit(size).all()

        logger.debug(f"Listed {len(items)} of {total} contacts (page={page}, search={search!r})")
        return Page(items=items, total_items=total, page=page, size=size)

    def get(self, contact_id: UUID) -> Optional[Contact]:
        return (
            self.db.query(Contact)
            .options(joinedload(Contact.category))
            .filter(Contact.id == contact_id)
            .first()
        )

    def find_by_email(self, email: str) -> Optional[Contact]:
        return self.db.query(Contact).filter(Contact.email == email).first()

    def save(self, contact: Contact) -> Contact:
        """Insert or update a contact.

        Returns:
            Contact: The persisted contact
        """
        try:
            self.db.add(contact)
            self.db.commit()
            self.db.refresh(contact)
            logger.info(f"Saved contact: {contact.id}")
            return contact
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to save contact: {e}")
            raise

    def delete(self, contact: Contact) -> None:
        try:
            self.db.delete(contact)
            self.db.commit()
            logger.info(f"Deleted contact: {contact.id}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete contact {contact.id}: {e}")
            raise
