"""Configuration package."""

from .settings import Settings, StorageConfig, get_settings

__all__ = ["Settings", "StorageConfig", "get_settings"]
