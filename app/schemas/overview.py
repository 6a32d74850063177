"""Audit overview and process detail API schemas."""

from datetime import datetime

from pydantic import BaseModel

from app.application.dtos.overview import AuditRow, OrphanSweepReport, ProcessDetail


class OverviewRowResponse(BaseModel):
    """One row per process; unresolved references are shown as '—'."""

    process_id: str
    process_number: int
    departments: str
    token: str
    category: str
    note: str
    created_at: datetime
    last_edit: datetime
    upload_count: int

    @classmethod
    def from_row(cls, row: AuditRow) -> "OverviewRowResponse":
        return cls(
            process_id=row.process_id,
            process_number=row.process_number,
            departments=row.department_display,
            token=row.token_display,
            category=row.category_name,
            note=row.note,
            created_at=row.created_at,
            last_edit=row.last_edit,
            upload_count=row.upload_count,
        )


class OverviewResponse(BaseModel):
    items: list[OverviewRowResponse]
    total: int


class UploadItem(BaseModel):
    id: str
    file_path: str
    mime_type: str | None = None
    size: int | None = None
    created_at: datetime
    public_url: str


class ProcessDetailResponse(BaseModel):
    """Process with resolved token/category and its uploads (newest first)."""

    id: str
    process_number: int
    token: str
    category: str
    note: str | None = None
    created_at: datetime
    uploads: list[UploadItem]

    @classmethod
    def from_detail(cls, detail: ProcessDetail) -> "ProcessDetailResponse":
        p = detail.process
        return cls(
            id=p.id,
            process_number=p.process_number,
            token=detail.token_display,
            category=detail.category_name,
            note=p.note,
            created_at=p.created_at,
            uploads=[
                UploadItem(
                    id=v.upload.id,
                    file_path=v.upload.file_path,
                    mime_type=v.upload.mime_type,
                    size=v.upload.size,
                    created_at=v.upload.created_at,
                    public_url=v.public_url,
                )
                for v in detail.uploads
            ],
        )


class OrphanSweepRequest(BaseModel):
    dry_run: bool = True
    grace_minutes: int | None = None


class OrphanSweepResponse(BaseModel):
    scanned: int
    orphaned: list[str]
    removed: list[str]
    kept_within_grace: list[str]
    dry_run: bool
    errors: list[str]

    @classmethod
    def from_report(cls, report: OrphanSweepReport) -> "OrphanSweepResponse":
        return cls(
            scanned=report.scanned,
            orphaned=list(report.orphaned),
            removed=list(report.removed),
            kept_within_grace=list(report.kept_within_grace),
            dry_run=report.dry_run,
            errors=list(report.errors),
        )
