"""Public intake API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.upload import UploadBatchResult


class IntakeCategoryItem(BaseModel):
    """Category as offered on the intake form."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    notes_required: bool


class StoredFileItem(BaseModel):
    index: int
    name: str
    upload_id: str
    file_path: str


class FailedFileItem(BaseModel):
    index: int
    name: str
    step: str = Field(..., description="storage or metadata")
    message: str


class UploadBatchResponse(BaseModel):
    """Outcome of one batch. succeeded is false when a file failed; later files are skipped."""

    succeeded: bool
    message: str
    total: int
    stored: list[StoredFileItem]
    failed: FailedFileItem | None = None
    skipped: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, batch: UploadBatchResult) -> "UploadBatchResponse":
        failed = batch.failed
        return cls(
            succeeded=batch.succeeded,
            message=batch.message,
            total=batch.total,
            stored=[
                StoredFileItem(
                    index=s.index,
                    name=s.name,
                    upload_id=s.upload.id,
                    file_path=s.upload.file_path,
                )
                for s in batch.stored
            ],
            failed=(
                FailedFileItem(
                    index=failed.index,
                    name=failed.name,
                    step=failed.step.value,
                    message=failed.message,
                )
                if failed
                else None
            ),
            skipped=list(batch.skipped),
        )


class IntakeResponse(BaseModel):
    """Response for POST /intake. The process exists even when the batch failed."""

    process_id: str
    process_number: int
    category_name: str
    note: str | None = None
    created_at: datetime
    notification_requested: bool
    batch: UploadBatchResponse
