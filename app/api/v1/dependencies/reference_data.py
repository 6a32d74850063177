"""Reference data dependencies (composition root)."""

from __future__ import annotations

from app.api.v1.dependencies.db import ReadSession, WriteSession
from app.application.services.reference_data_service import ReferenceDataService
from app.infrastructure.persistence.repositories import (
    CategoryRepository,
    DepartmentRepository,
    TokenRepository,
)


async def get_reference_data_reader(db: ReadSession) -> ReferenceDataService:
    """Reference data service for list/get routes."""
    return ReferenceDataService(
        DepartmentRepository(db), CategoryRepository(db), TokenRepository(db)
    )


async def get_reference_data_service(db: WriteSession) -> ReferenceDataService:
    """Reference data service for write routes (commit on success)."""
    return ReferenceDataService(
        DepartmentRepository(db), CategoryRepository(db), TokenRepository(db)
    )
