"""Contacts API: category and contact management with pluggable photo storage."""

__version__ = "0.1.0"
