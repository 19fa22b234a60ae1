"""SQLAlchemy-based repository for Category entities."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import String, func
from sqlalchemy.orm import Session

from contacts_api.models.db import Category, Contact
from contacts_api.text import remove_accents

from .paging import Page

logger = logging.getLogger(__name__)


class CategoryDBRepository:
    """Repository for managing Category entities in the database."""

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
    ) -> Page[Category]:
        """List categories ordered by name.

        Args:
            page: Zero-based page number
            size: Page size
            descending: Sort by name descending instead of ascending
            search: Accent- and case-insensitive substring filter on name

        Returns:
            Page[Category]: The requested page
        """
        query = self.db.query(Category)

        if search:
            term = remove_accents(search).lower()
            name = func.lower(func.unaccent(Category.name, type_=String))
            query = query.filter(name.contains(term, autoescape=True))

        total = query.count()
        order = Category.name.desc() if descending else Category.name.asc()
        items = query.order_by(order).offset(page * size).limit(size).all()

        logger.debug(f"Listed {len(items)} of {total} categories (page={page}, search={search!r})")
        return Page(items=items, total_items=total, page=page, size=size)

    def get(self, category_id: UUID) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def find_by_name(self, name: str) -> Optional[Category]:
        """Find a category by its exact name."""
        return self.db.query(Category).filter(Category.name == name).first()

    def save(self, category: Category) -> Category:
        """Insert or update a category.

        Returns:
            Category: The persisted category
        """
        try:
            self.db.add(category)
            self.db.commit()
            self.db.refresh(category)
            logger.info(f"Saved category: {category.id}")
            return category
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to save category: {e}")
            raise

    def delete(self, category: Category) -> None:
        try:
            self.db.delete(category)
            self.db.commit()
            logger.info(f"Deleted category: {category.id}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete category {category.id}: {e}")
            raise

    def count_contacts(self, category_id: UUID) -> int:
        """Count contacts referencing a category."""
        return self.db.query(Contact).filter(Contact.category_id == category_id).count()
