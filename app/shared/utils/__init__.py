"""Shared utilities: datetime, generators, sanitization."""

from app.shared.utils.datetime import (
    ensure_utc,
    format_local,
    from_timestamp_utc,
    to_timestamp_ms,
    utc_now,
)
from app.shared.utils.generators import generate_cuid, generate_token_secret
from app.shared.utils.sanitization import (
    InputSanitizer,
    sanitize_storage_name,
)

__all__ = [
    "generate_cuid",
    "generate_token_secret",
    "utc_now",
    "ensure_utc",
    "format_local",
    "from_timestamp_utc",
    "to_timestamp_ms",
    "InputSanitizer",
    "sanitize_storage_name",
]
