"""Audit API (administrators): overview, process detail, add files, delete upload."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile

from app.api.v1.dependencies import (
    CurrentAdmin,
    get_audit_operations,
    get_audit_operations_reader,
    get_audit_view_builder,
)
from app.api.v1.endpoints._uploads import read_incoming_files
from app.application.dtos.overview import OverviewFilters, OverviewSort
from app.application.use_cases.audit import AuditOperations, AuditViewBuilder
from app.core.limiter import limit_writes
from app.domain.enums import OverviewSortField
from app.schemas.intake import UploadBatchResponse
from app.schemas.overview import (
    OverviewResponse,
    OverviewRowResponse,
    ProcessDetailResponse,
)

router = APIRouter()


@router.get("/overview", response_model=OverviewResponse)
async def get_overview(
    _: CurrentAdmin,
    builder: Annotated[AuditViewBuilder, Depends(get_audit_view_builder)],
    department_id: str | None = None,
    token_id: str | None = None,
    category_id: str | None = None,
    sort: OverviewSortField = OverviewSortField.CREATED_AT,
    order: Annotated[Literal["asc", "desc"], Query()] = "desc",
):
    """One row per process. Filters combine; an unknown id yields no rows."""
    rows = await builder.build_overview(
        OverviewFilters(
            department_id=department_id or None,
            token_id=token_id or None,
            category_id=category_id or None,
        ),
        OverviewSort(field=sort, descending=order == "desc"),
    )
    return OverviewResponse(
        items=[OverviewRowResponse.from_row(r) for r in rows],
        total=len(rows),
    )


@router.get("/processes/{process_id}", response_model=ProcessDetailResponse)
async def get_process(
    process_id: str,
    _: CurrentAdmin,
    operations: Annotated[AuditOperations, Depends(get_audit_operations_reader)],
):
    """Process with its uploads, newest first, each with a public URL."""
    detail = await operations.get_process_detail(process_id)
    return ProcessDetailResponse.from_detail(detail)


@router.post("/processes/{process_id}/uploads", response_model=UploadBatchResponse)
@limit_writes
async def add_process_uploads(
    request: Request,
    process_id: str,
    _: CurrentAdmin,
    operations: Annotated[AuditOperations, Depends(get_audit_operations)],
    files: list[UploadFile] = File(...),
):
    """Append files to an existing process. Any file type is accepted."""
    incoming = await read_incoming_files(files)
    batch = await operations.add_files_to_process(process_id, incoming)
    return UploadBatchResponse.from_result(batch)


@router.delete("/uploads/{upload_id}", status_code=204)
@limit_writes
async def delete_upload(
    request: Request,
    upload_id: str,
    _: CurrentAdmin,
    operations: Annotated[AuditOperations, Depends(get_audit_operations)],
):
    """Remove the blob, then the upload row."""
    await operations.delete_upload(upload_id)
