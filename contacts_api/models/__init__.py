"""Database models for the Contacts API."""

from .db import Base, Category, Contact

__all__ = ["Base", "Category", "Contact"]
