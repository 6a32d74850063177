"""DTOs for intake processes (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ProcessResult:
    """Process read-model (result of start_process, get_by_id, list)."""

    id: str
    process_number: int
    token_id: str
    category_id: str | None
    note: str | None
    created_at: datetime
