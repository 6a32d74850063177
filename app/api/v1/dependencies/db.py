"""DB session and repository dependencies (composition root).

Read routes get repositories over get_db; write routes over
get_db_transactional (commit on success, rollback on error). A route
pulls repositories from one of the two, never both. Intake and upload
maintenance use StepSession: a plain session the use case commits after
each step, so stored files are durable before the response is built.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    AdminUserRepository,
    CategoryRepository,
)

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]
StepSession = Annotated[AsyncSession, Depends(get_db)]


async def get_admin_user_repo(db: ReadSession) -> AdminUserRepository:
    return AdminUserRepository(db)


async def get_admin_user_repo_for_write(db: WriteSession) -> AdminUserRepository:
    return AdminUserRepository(db)


async def get_category_repo(db: ReadSession) -> CategoryRepository:
    return CategoryRepository(db)
