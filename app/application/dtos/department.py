"""DTOs for departments (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DepartmentResult:
    """Department read-model."""

    id: str
    name: str
    created_at: datetime
