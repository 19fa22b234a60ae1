"""Text normalization helpers used by search."""

import unicodedata
from typing import Optional


def remove_accents(value: Optional[str]) -> Optional[str]:
    """Strip diacritics from a string ("São Paulo" -> "Sao Paulo")."""
    if value is None:
        return None
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))
