"""Audit use cases: overview, process operations, orphan sweep."""

from app.application.use_cases.audit.audit_operations import AuditOperations
from app.application.use_cases.audit.orphan_sweep import OrphanSweeper
from app.application.use_cases.audit.overview import (
    AuditViewBuilder,
    apply_filters,
    build_indexes,
    fetch_snapshot,
    project_rows,
    sort_rows,
)

__all__ = [
    "AuditOperations",
    "AuditViewBuilder",
    "OrphanSweeper",
    "apply_filters",
    "build_indexes",
    "fetch_snapshot",
    "project_rows",
    "sort_rows",
]
