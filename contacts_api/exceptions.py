"""Domain exceptions raised by the service layer."""

from typing import Any


class ContactsAPIError(Exception):
    """Base exception for domain errors."""
    pass


class EntityNotFoundError(ContactsAPIError):
    """A category or contact with the given id does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} with id = {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class EmailAlreadyInUseError(ContactsAPIError):
    def __init__(self):
        super().__init__("Email is already in use")


class CategoryExistsError(ContactsAPIError):
    def __init__(self):
        super().__init__("The category already exists")


class CategoryInUseError(ContactsAPIError):
    """The category is still referenced by contacts and cannot be deleted."""

    def __init__(self, category_id: Any):
        super().__init__(f"Category with id = {category_id} still has contacts")
        self.category_id = category_id


class InvalidFileTypeError(ContactsAPIError):
    def __init__(self):
        super().__init__("The file type is not accepted")


class PhotoTooLargeError(ContactsAPIError):
    def __init__(self, limit: int):
        super().__init__(f"The photo exceeds the maximum upload size of {limit} bytes")
        self.limit = limit
