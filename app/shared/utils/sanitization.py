"""Input sanitization utilities for storage keys."""

import re
from typing import ClassVar


class InputSanitizer:
    """
    Sanitize client-supplied names before they become part of a storage key.

    HTML output is not handled here; the notification template autoescapes.
    """

    STORAGE_NAME_DISALLOWED: ClassVar[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9_.-]")
    STORAGE_NAME_FALLBACK: ClassVar[str] = "file"

    @classmethod
    def sanitize_storage_name(cls, value: str) -> str:
        """Replace every character outside [A-Za-z0-9_.-] with '_'.

        Total and idempotent: any input yields a non-empty key segment, and a
        sanitized value sanitizes to itself. Path separators never survive,
        so the result cannot escape its process folder.

        Args:
            value: Original client filename.

        Returns:
            Safe filename segment for a storage path.
        """
        cleaned = cls.STORAGE_NAME_DISALLOWED.sub("_", value or "")
        return cleaned or cls.STORAGE_NAME_FALLBACK


def sanitize_storage_name(value: str) -> str:
    """Shortcut for InputSanitizer.sanitize_storage_name."""
    return InputSanitizer.sanitize_storage_name(value)
