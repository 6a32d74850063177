"""Audit overview pipeline: snapshot, projection, filtering and sorting."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.department import DepartmentResult
from app.application.dtos.overview import (
    EMPTY_DISPLAY,
    AuditSnapshot,
    OverviewFilters,
    OverviewSort,
)
from app.application.dtos.token import TokenMembership
from app.application.use_cases.audit import (
    AuditViewBuilder,
    apply_filters,
    build_indexes,
    fetch_snapshot,
    project_rows,
    sort_rows,
)
from app.domain.enums import OverviewSortField
from app.domain.exceptions import PersistenceException
from tests.factories import T0, make_category, make_process, make_token, make_upload


def _snapshot(**overrides) -> AuditSnapshot:
    """Two tokens, two departments, two processes; #41 has no uploads."""
    data = dict(
        departments=(
            DepartmentResult(id="d1", name="Einkauf", created_at=T0),
            DepartmentResult(id="d2", name="Lager", created_at=T0),
        ),
        tokens=(
            make_token("tk1", "tok_abc123", label="Lager Nord"),
            make_token("tk2", "tok_zzz999"),
        ),
        memberships=(
            TokenMembership(token_id="tk1", department_id="d2"),
            TokenMembership(token_id="tk1", department_id="d1"),
        ),
        categories=(make_category("cat1", "Wareneingang"),),
        processes=(
            make_process("p42", 42, token_id="tk1", note="n",
                         created_at=T0 + timedelta(minutes=2)),
            make_process("p41", 41, token_id="tk2", category_id=None,
                         created_at=T0 + timedelta(minutes=1)),
        ),
        uploads=(
            make_upload("u1", "p42", "42/1_0_a.jpg", created_at=T0 + timedelta(minutes=3)),
            make_upload("u2", "p42", "42/1_1_b.jpg", created_at=T0 + timedelta(minutes=5)),
        ),
    )
    data.update(overrides)
    return AuditSnapshot(**data)


def _rows(snapshot: AuditSnapshot):
    return project_rows(snapshot, build_indexes(snapshot))


class TestProjectRows:
    def test_one_row_per_process(self) -> None:
        rows = _rows(_snapshot())
        assert [r.process_number for r in rows] == [42, 41]

    def test_resolved_display_values(self) -> None:
        row = _rows(_snapshot())[0]
        assert row.department_names == ("Einkauf", "Lager")
        assert row.department_display == "Einkauf, Lager"
        assert row.token_display == "Lager Nord (tok_abc123)"
        assert row.category_name == "Wareneingang"
        assert row.note == "n"
        assert row.upload_count == 2

    def test_last_edit_is_newest_upload(self) -> None:
        row = _rows(_snapshot())[0]
        assert row.last_edit == T0 + timedelta(minutes=5)

    def test_last_edit_without_uploads_is_creation_time(self) -> None:
        row = _rows(_snapshot())[1]
        assert row.last_edit == row.created_at
        assert row.upload_count == 0

    def test_missing_references_show_placeholder(self) -> None:
        row = _rows(_snapshot())[1]
        assert row.token_display == "tok_zzz999"
        assert row.category_name == EMPTY_DISPLAY
        assert row.note == EMPTY_DISPLAY
        assert row.department_display == EMPTY_DISPLAY

    def test_unknown_token_shows_placeholder(self) -> None:
        row = _rows(_snapshot(tokens=()))[0]
        assert row.token_display == EMPTY_DISPLAY


class TestApplyFilters:
    def test_no_filters_keeps_everything(self) -> None:
        snap = _snapshot()
        assert len(apply_filters(_rows(snap), OverviewFilters(), snap)) == 2

    def test_department_filter(self) -> None:
        snap = _snapshot()
        rows = apply_filters(_rows(snap), OverviewFilters(department_id="d2"), snap)
        assert [r.process_number for r in rows] == [42]

    def test_token_filter(self) -> None:
        snap = _snapshot()
        rows = apply_filters(_rows(snap), OverviewFilters(token_id="tk2"), snap)
        assert [r.process_number for r in rows] == [41]

    def test_filters_combine(self) -> None:
        snap = _snapshot()
        rows = apply_filters(
            _rows(snap), OverviewFilters(token_id="tk2", category_id="cat1"), snap
        )
        assert rows == []

    @pytest.mark.parametrize(
        "filters",
        [
            OverviewFilters(department_id="missing"),
            OverviewFilters(token_id="missing"),
            OverviewFilters(category_id="missing"),
        ],
    )
    def test_unknown_id_matches_nothing(self, filters: OverviewFilters) -> None:
        snap = _snapshot()
        assert apply_filters(_rows(snap), filters, snap) == []


class TestSortRows:
    def test_default_is_newest_first(self) -> None:
        rows = sort_rows(_rows(_snapshot()), OverviewSort())
        assert [r.process_number for r in rows] == [42, 41]

    def test_ascending_by_process_number(self) -> None:
        rows = sort_rows(
            _rows(_snapshot()),
            OverviewSort(field=OverviewSortField.PROCESS_NUMBER, descending=False),
        )
        assert [r.process_number for r in rows] == [41, 42]

    def test_by_last_edit(self) -> None:
        rows = sort_rows(
            _rows(_snapshot()), OverviewSort(field=OverviewSortField.LAST_EDIT)
        )
        assert rows[0].process_number == 42


def _reader(snapshot: AuditSnapshot) -> AsyncMock:
    reader = AsyncMock()
    reader.read_departments = AsyncMock(return_value=list(snapshot.departments))
    reader.read_tokens = AsyncMock(return_value=list(snapshot.tokens))
    reader.read_memberships = AsyncMock(return_value=list(snapshot.memberships))
    reader.read_categories = AsyncMock(return_value=list(snapshot.categories))
    reader.read_processes = AsyncMock(return_value=list(snapshot.processes))
    reader.read_uploads = AsyncMock(return_value=list(snapshot.uploads))
    return reader


async def test_fetch_snapshot_collects_all_reads() -> None:
    snap = _snapshot()
    assert await fetch_snapshot(_reader(snap)) == snap


async def test_fetch_snapshot_fails_as_a_whole() -> None:
    reader = _reader(_snapshot())
    reader.read_uploads = AsyncMock(side_effect=ConnectionError("gone"))
    with pytest.raises(PersistenceException):
        await fetch_snapshot(reader)


async def test_failed_read_cancels_the_other_reads() -> None:
    cancelled = asyncio.Event()

    async def slow_tokens():
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            cancelled.set()
            raise

    reader = _reader(_snapshot())
    reader.read_tokens = AsyncMock(side_effect=slow_tokens)
    reader.read_uploads = AsyncMock(side_effect=ConnectionError("gone"))
    with pytest.raises(PersistenceException) as exc_info:
        await fetch_snapshot(reader)
    assert exc_info.value.details == {
        "operation": "overview snapshot",
        "reason": "ConnectionError",
    }
    assert cancelled.is_set()


async def test_domain_error_from_a_read_is_raised_unwrapped() -> None:
    reader = _reader(_snapshot())
    reader.read_processes = AsyncMock(
        side_effect=PersistenceException("list processes", "OperationalError")
    )
    with pytest.raises(PersistenceException) as exc_info:
        await fetch_snapshot(reader)
    assert exc_info.value.details["operation"] == "list processes"


async def test_build_overview_end_to_end() -> None:
    builder = AuditViewBuilder(_reader(_snapshot()))
    rows = await builder.build_overview(
        OverviewFilters(department_id="d1"),
        OverviewSort(field=OverviewSortField.PROCESS_NUMBER),
    )
    assert [r.process_number for r in rows] == [42]
