"""DTOs for the audit overview, process detail and orphan sweep (no dependency on ORM)."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from app.application.dtos.category import CategoryResult
from app.application.dtos.department import DepartmentResult
from app.application.dtos.process import ProcessResult
from app.application.dtos.token import TokenMembership, TokenResult
from app.application.dtos.upload import UploadResult
from app.domain.enums import OverviewSortField

EMPTY_DISPLAY = "—"


@dataclass(frozen=True)
class OverviewFilters:
    """Optional id filters; all given filters must match."""

    department_id: str | None = None
    token_id: str | None = None
    category_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.department_id or self.token_id or self.category_id)


@dataclass(frozen=True)
class OverviewSort:
    field: OverviewSortField = OverviewSortField.CREATED_AT
    descending: bool = True


@dataclass(frozen=True)
class AuditSnapshot:
    """Everything the overview needs, read once and passed by value.

    Departments and categories are ordered by name; tokens, processes and
    uploads newest first.
    """

    departments: tuple[DepartmentResult, ...]
    tokens: tuple[TokenResult, ...]
    memberships: tuple[TokenMembership, ...]
    categories: tuple[CategoryResult, ...]
    processes: tuple[ProcessResult, ...]
    uploads: tuple[UploadResult, ...]


@dataclass(frozen=True)
class AuditIndexes:
    token_by_id: Mapping[str, TokenResult]
    category_by_id: Mapping[str, CategoryResult]
    department_by_id: Mapping[str, DepartmentResult]
    department_ids_by_token_id: Mapping[str, frozenset[str]]
    uploads_by_process_id: Mapping[str, tuple[UploadResult, ...]]


@dataclass(frozen=True)
class AuditRow:
    """One overview row per process, with references resolved for display."""

    process_id: str
    process_number: int
    department_names: tuple[str, ...]
    token_display: str
    category_name: str
    note: str
    created_at: datetime
    last_edit: datetime
    upload_count: int

    @property
    def department_display(self) -> str:
        return ", ".join(self.department_names) if self.department_names else EMPTY_DISPLAY


@dataclass(frozen=True)
class UploadView:
    """Upload metadata plus the public URL of its blob."""

    upload: UploadResult
    public_url: str


@dataclass(frozen=True)
class ProcessDetail:
    process: ProcessResult
    token_display: str
    category_name: str
    uploads: tuple[UploadView, ...]


@dataclass(frozen=True)
class OrphanSweepReport:
    """Outcome of one reconciliation sweep over the blob store."""

    scanned: int
    orphaned: tuple[str, ...]
    removed: tuple[str, ...] = ()
    kept_within_grace: tuple[str, ...] = ()
    dry_run: bool = True
    errors: tuple[str, ...] = field(default_factory=tuple)
