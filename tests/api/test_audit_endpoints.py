"""Administrator audit and maintenance endpoints (services mocked)."""

from unittest.mock import AsyncMock

from httpx import AsyncClient

from app.api.v1.dependencies import (
    get_admin_user_repo,
    get_audit_operations,
    get_audit_operations_reader,
    get_audit_view_builder,
    get_orphan_sweeper,
)
from app.application.dtos.overview import (
    AuditRow,
    OrphanSweepReport,
    OverviewFilters,
    OverviewSort,
    ProcessDetail,
    UploadView,
)
from app.application.dtos.upload import UploadBatchResult
from app.domain.enums import OverviewSortField
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.exceptions import StorageDeleteError
from app.main import app
from tests.factories import T0, make_process, make_upload

ROW = AuditRow(
    process_id="p42",
    process_number=42,
    department_names=("Lager", "Versand"),
    token_display="Lager Nord (tok_abc123)",
    category_name="Wareneingang",
    note="—",
    created_at=T0,
    last_edit=T0,
    upload_count=2,
)


async def test_overview_requires_admin(client: AsyncClient) -> None:
    builder = AsyncMock()
    app.dependency_overrides[get_audit_view_builder] = lambda: builder
    app.dependency_overrides[get_admin_user_repo] = lambda: AsyncMock()
    response = await client.get(
        "/api/v1/overview", headers={"Authorization": "Bearer nope"}
    )
    assert response.status_code == 401
    builder.build_overview.assert_not_awaited()


async def test_overview_passes_filters_and_sort(client: AsyncClient, as_admin) -> None:
    builder = AsyncMock()
    builder.build_overview = AsyncMock(return_value=[ROW])
    app.dependency_overrides[get_audit_view_builder] = lambda: builder

    response = await client.get(
        "/api/v1/overview",
        params={"department_id": "d1", "category_id": "", "sort": "process_number", "order": "asc"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["departments"] == "Lager, Versand"
    assert data["items"][0]["token"] == "Lager Nord (tok_abc123)"
    builder.build_overview.assert_awaited_once_with(
        OverviewFilters(department_id="d1"),
        OverviewSort(field=OverviewSortField.PROCESS_NUMBER, descending=False),
    )


async def test_overview_rejects_unknown_sort(client: AsyncClient, as_admin) -> None:
    app.dependency_overrides[get_audit_view_builder] = lambda: AsyncMock()
    response = await client.get("/api/v1/overview", params={"sort": "password"})
    assert response.status_code == 422


async def test_process_detail(client: AsyncClient, as_admin) -> None:
    operations = AsyncMock()
    operations.get_process_detail = AsyncMock(
        return_value=ProcessDetail(
            process=make_process(),
            token_display="tok_abc123",
            category_name="Wareneingang",
            uploads=(UploadView(make_upload(), "http://test/files/42/1_0_a.jpg"),),
        )
    )
    app.dependency_overrides[get_audit_operations_reader] = lambda: operations

    response = await client.get("/api/v1/processes/p42")

    assert response.status_code == 200
    data = response.json()
    assert data["process_number"] == 42
    assert data["uploads"][0]["public_url"] == "http://test/files/42/1_0_a.jpg"


async def test_process_detail_not_found(client: AsyncClient, as_admin) -> None:
    operations = AsyncMock()
    operations.get_process_detail = AsyncMock(
        side_effect=ResourceNotFoundException("process", "nope")
    )
    app.dependency_overrides[get_audit_operations_reader] = lambda: operations
    response = await client.get("/api/v1/processes/nope")
    assert response.status_code == 404


async def test_add_uploads_accepts_any_type(client: AsyncClient, as_admin) -> None:
    operations = AsyncMock()
    operations.add_files_to_process = AsyncMock(return_value=UploadBatchResult(total=1))
    app.dependency_overrides[get_audit_operations] = lambda: operations

    response = await client.post(
        "/api/v1/processes/p42/uploads",
        files=[("files", ("report.pdf", b"%PDF", "application/pdf"))],
    )

    assert response.status_code == 200
    process_id, files = operations.add_files_to_process.await_args.args
    assert process_id == "p42"
    assert files[0].mime_type == "application/pdf"


async def test_delete_upload(client: AsyncClient, as_admin) -> None:
    operations = AsyncMock()
    app.dependency_overrides[get_audit_operations] = lambda: operations
    response = await client.delete("/api/v1/uploads/u1")
    assert response.status_code == 204
    operations.delete_upload.assert_awaited_once_with("u1")


async def test_delete_upload_storage_failure_returns_502(client: AsyncClient, as_admin) -> None:
    operations = AsyncMock()
    operations.delete_upload = AsyncMock(side_effect=StorageDeleteError("42/a.jpg", "denied"))
    app.dependency_overrides[get_audit_operations] = lambda: operations
    response = await client.delete("/api/v1/uploads/u1")
    assert response.status_code == 502


async def test_orphan_sweep_defaults_to_dry_run(client: AsyncClient, as_admin) -> None:
    sweeper = AsyncMock()
    sweeper.sweep_orphans = AsyncMock(
        return_value=OrphanSweepReport(scanned=3, orphaned=("42/x.jpg",))
    )
    app.dependency_overrides[get_orphan_sweeper] = lambda: sweeper

    response = await client.post("/api/v1/maintenance/orphan-sweep", json={})

    assert response.status_code == 200
    assert response.json()["orphaned"] == ["42/x.jpg"]
    assert sweeper.sweep_orphans.await_args.kwargs["dry_run"] is True
