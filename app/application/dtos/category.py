"""DTOs for process categories (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CategoryResult:
    """Category read-model. notes_required makes the process note mandatory."""

    id: str
    name: str
    notes_required: bool
    created_at: datetime
