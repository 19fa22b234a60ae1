"""Category use cases."""
import logging
from typing import Optional
from uuid import UUID

from contacts_api.exceptions import CategoryExistsError, CategoryInUseError, EntityNotFoundError
from contacts_api.models.db import Category
from contacts_api.repositories.category import CategoryDBRepository
from contacts_api.repositories.paging import Page

logger = logging.getLogger(__name__)


class CategoryService:
    """Category CRUD with name uniqueness checks."""

    def __init__(self, repository: CategoryDBRepository):
        self.repository = repository

    def list(
        self,
        page: int = 0,
        size: int = 10,
        descending: bool = False,
        search: Optional[str] = None
    ) -> Page[Category]:
        return self.repository.list(page=page, size=size, descending=descending, search=search)

    def find_by_id(self, category_id: UUID) -> Category:
        """Get a category or raise EntityNotFoundError."""
        category = self.repository.get(category_id)
        if category is None:
            raise EntityNotFoundError("Category", category_id)
        return category

    def create(self, name: str) -> Category:
        if self.repository.find_by_name(name) is not None:
            raise CategoryExistsError()

        category = self.repository.save(Category(name=name))
        logger.info(f"Created category {category.id} ({name!r})")
        return category

    def update(self, category_id: UUID, name: str) -> Category:
        category = self.find_by_id(category_id)

        if category.name != name:
            if self.repository.find_by_name(name) is not None:
                raise CategoryExistsError()
            category.name = name

        return self.repository.save(category)

    def delete(self, category_id: UUID) -> None:
        """Delete a category that no contact references.

        Raises:
            EntityNotFoundError: If the category does not exist.
            CategoryInUseError: If contacts still belong to the category.
        """
        category = self.find_by_id(category_id)

        if self.repository.count_contacts(category_id) > 0:
            raise CategoryInUseError(category_id)

        self.repository.delete(category)
