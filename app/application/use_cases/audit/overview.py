"""Audit overview: one display row per process, built as a staged pipeline.

fetch_snapshot -> build_indexes -> project_rows -> apply_filters -> sort_rows.
Only the fetch stage touches the store; every later stage is a pure function
of the snapshot, so filtering happens on resolved display values.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import TYPE_CHECKING

from app.application.dtos.overview import (
    EMPTY_DISPLAY,
    AuditIndexes,
    AuditRow,
    AuditSnapshot,
    OverviewFilters,
    OverviewSort,
)
from app.domain.enums import OverviewSortField
from app.domain.exceptions import IntakeException, PersistenceException
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.dtos.token import TokenResult
    from app.application.dtos.upload import UploadResult
    from app.application.interfaces.repositories import IAuditSnapshotReader

logger = get_logger(__name__)


async def fetch_snapshot(reader: IAuditSnapshotReader) -> AuditSnapshot:
    """Issue the six reads concurrently; any failure fails the whole snapshot.

    The first failing read cancels the others, so no read outlives the call.

    Raises:
        PersistenceException: one of the reads failed.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            departments = tg.create_task(reader.read_departments())
            tokens = tg.create_task(reader.read_tokens())
            memberships = tg.create_task(reader.read_memberships())
            categories = tg.create_task(reader.read_categories())
            processes = tg.create_task(reader.read_processes())
            uploads = tg.create_task(reader.read_uploads())
    except ExceptionGroup as eg:
        first = eg.exceptions[0]
        if isinstance(first, IntakeException):
            raise first from None
        logger.error("Overview snapshot read failed: %s", first, exc_info=first)
        raise PersistenceException("overview snapshot", type(first).__name__) from first
    return AuditSnapshot(
        departments=tuple(departments.result()),
        tokens=tuple(tokens.result()),
        memberships=tuple(memberships.result()),
        categories=tuple(categories.result()),
        processes=tuple(processes.result()),
        uploads=tuple(uploads.result()),
    )


def build_indexes(snapshot: AuditSnapshot) -> AuditIndexes:
    """Lookup tables over the snapshot. Uploads keep snapshot order (newest first)."""
    department_ids: dict[str, set[str]] = defaultdict(set)
    for membership in snapshot.memberships:
        department_ids[membership.token_id].add(membership.department_id)
    uploads: dict[str, list[UploadResult]] = defaultdict(list)
    for upload in snapshot.uploads:
        uploads[upload.process_id].append(upload)
    for group in uploads.values():
        group.sort(key=lambda u: u.created_at, reverse=True)
    return AuditIndexes(
        token_by_id={t.id: t for t in snapshot.tokens},
        category_by_id={c.id: c for c in snapshot.categories},
        department_by_id={d.id: d for d in snapshot.departments},
        department_ids_by_token_id={k: frozenset(v) for k, v in department_ids.items()},
        uploads_by_process_id={k: tuple(v) for k, v in uploads.items()},
    )


def token_display(token: TokenResult | None) -> str:
    return token.display if token else EMPTY_DISPLAY


def project_rows(snapshot: AuditSnapshot, indexes: AuditIndexes) -> list[AuditRow]:
    """One row per process, in snapshot order."""
    rows: list[AuditRow] = []
    for process in snapshot.processes:
        member_ids = indexes.department_ids_by_token_id.get(process.token_id, frozenset())
        # snapshot.departments is ordered by name, so names come out ordered too
        department_names = tuple(
            d.name for d in snapshot.departments if d.id in member_ids
        )
        category = (
            indexes.category_by_id.get(process.category_id)
            if process.category_id
            else None
        )
        uploads = indexes.uploads_by_process_id.get(process.id, ())
        rows.append(
            AuditRow(
                process_id=process.id,
                process_number=process.process_number,
                department_names=department_names,
                token_display=token_display(indexes.token_by_id.get(process.token_id)),
                category_name=category.name if category else EMPTY_DISPLAY,
                note=process.note or EMPTY_DISPLAY,
                created_at=process.created_at,
                last_edit=uploads[0].created_at if uploads else process.created_at,
                upload_count=len(uploads),
            )
        )
    return rows


def apply_filters(
    rows: list[AuditRow], filters: OverviewFilters, snapshot: AuditSnapshot
) -> list[AuditRow]:
    """Keep rows matching every given filter, compared on display values.

    A filter id that is not in the snapshot matches no row.
    """
    if filters.is_empty:
        return list(rows)
    department_name: str | None = None
    token_value: str | None = None
    category_name: str | None = None
    if filters.department_id:
        department = next(
            (d for d in snapshot.departments if d.id == filters.department_id), None
        )
        if department is None:
            return []
        department_name = department.name
    if filters.token_id:
        token = next((t for t in snapshot.tokens if t.id == filters.token_id), None)
        if token is None:
            return []
        token_value = token.display
    if filters.category_id:
        category = next(
            (c for c in snapshot.categories if c.id == filters.category_id), None
        )
        if category is None:
            return []
        category_name = category.name

    def matches(row: AuditRow) -> bool:
        if department_name is not None and department_name not in row.department_names:
            return False
        if token_value is not None and row.token_display != token_value:
            return False
        if category_name is not None and row.category_name != category_name:
            return False
        return True

    return [row for row in rows if matches(row)]


def sort_rows(rows: list[AuditRow], sort: OverviewSort) -> list[AuditRow]:
    """Stable sort by the chosen field; process_number breaks ties."""
    if sort.field == OverviewSortField.LAST_EDIT:
        return sorted(
            rows, key=lambda r: (r.last_edit, r.process_number), reverse=sort.descending
        )
    if sort.field == OverviewSortField.PROCESS_NUMBER:
        return sorted(rows, key=lambda r: r.process_number, reverse=sort.descending)
    return sorted(
        rows, key=lambda r: (r.created_at, r.process_number), reverse=sort.descending
    )


class AuditViewBuilder:
    """Builds the administrator overview. Read-only."""

    def __init__(self, reader: IAuditSnapshotReader) -> None:
        self._reader = reader

    @traced("audit.build_overview")
    async def build_overview(
        self,
        filters: OverviewFilters | None = None,
        sort: OverviewSort | None = None,
    ) -> list[AuditRow]:
        """Return filtered, sorted overview rows.

        Raises:
            PersistenceException: the snapshot could not be read.
        """
        snapshot = await fetch_snapshot(self._reader)
        indexes = build_indexes(snapshot)
        rows = project_rows(snapshot, indexes)
        rows = apply_filters(rows, filters or OverviewFilters(), snapshot)
        rows = sort_rows(rows, sort or OverviewSort())
        add_span_attributes(
            process_count=len(snapshot.processes), row_count=len(rows)
        )
        return rows
