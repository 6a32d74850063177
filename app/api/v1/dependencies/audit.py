"""Administrator audit dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.dependencies.db import ReadSession, StepSession
from app.api.v1.dependencies.infrastructure import get_blob_store
from app.application.interfaces.storage import IBlobStore
from app.application.use_cases.audit import (
    AuditOperations,
    AuditViewBuilder,
    OrphanSweeper,
)
from app.application.use_cases.intake import UploadPipeline
from app.core.config import get_settings
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.repositories import (
    CategoryRepository,
    ProcessRepository,
    SqlAuditSnapshotReader,
    TokenRepository,
    UploadRepository,
)


def get_audit_view_builder() -> AuditViewBuilder:
    """Overview builder; its six reads each open their own session."""
    settings = get_settings()
    reader = SqlAuditSnapshotReader(
        get_session_factory(), limit=settings.overview_fetch_limit
    )
    return AuditViewBuilder(reader)


def _build_operations(
    db: AsyncSession, blob_store: IBlobStore, *, commit_steps: bool = False
) -> AuditOperations:
    upload_repo = UploadRepository(db)
    transaction = db if commit_steps else None
    return AuditOperations(
        process_repo=ProcessRepository(db),
        upload_repo=upload_repo,
        token_repo=TokenRepository(db),
        category_repo=CategoryRepository(db),
        blob_store=blob_store,
        pipeline=UploadPipeline(blob_store, upload_repo, transaction=transaction),
        max_file_size=get_settings().max_upload_size,
        transaction=transaction,
    )


async def get_audit_operations_reader(
    db: ReadSession,
    blob_store: Annotated[IBlobStore, Depends(get_blob_store)],
) -> AuditOperations:
    """Audit operations over a read session (process detail)."""
    return _build_operations(db, blob_store)


async def get_audit_operations(
    db: StepSession,
    blob_store: Annotated[IBlobStore, Depends(get_blob_store)],
) -> AuditOperations:
    """Audit operations that commit each write (add files, delete upload)."""
    return _build_operations(db, blob_store, commit_steps=True)


async def get_orphan_sweeper(
    db: ReadSession,
    blob_store: Annotated[IBlobStore, Depends(get_blob_store)],
) -> OrphanSweeper:
    return OrphanSweeper(blob_store, UploadRepository(db))
