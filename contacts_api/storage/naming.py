"""Storage key generation for uploaded photos."""

import uuid
from pathlib import PurePath


def generate_key(original_filename: str) -> str:
    """Generate a fresh storage key for an uploaded file.

    The key is a random UUID4 followed by the file's base name, e.g.
    ``"1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed_cat.png"``. Keys are not derived
    from content, so the same file uploaded twice gets two keys.

    Args:
        original_filename: Filename supplied by the client.

    Returns:
        str: ``<uuid4>_<basename>``.

    Raises:
        ValueError: If the filename is empty.
    """
    # Browsers may send a full client path; keep the last component only
    name = PurePath(original_filename.replace("\\", "/")).name if original_filename else ""
    if not name:
        raise ValueError("Original filename cannot be empty")
    return f"{uuid.uuid4()}_{name}"
