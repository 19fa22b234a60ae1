"""Public URL derivation for stored photos."""

from typing import Optional

from config import StorageConfig


def photo_url(photo_key: Optional[str], config: StorageConfig) -> Optional[str]:
    """Resolve the public URL of a contact photo.

    Local photos are served by this API under ``url_prefix``; object store
    photos are served by the CDN under ``cdn_url``.
    """
    if not photo_key:
        return None
    if config.backend == "s3":
        return f"{config.cdn_url}{photo_key}"
    return f"{config.url_prefix}{photo_key}"
