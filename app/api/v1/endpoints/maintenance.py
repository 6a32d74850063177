"""Maintenance API (administrators): orphaned blob reconciliation."""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import CurrentAdmin, get_orphan_sweeper
from app.application.use_cases.audit import OrphanSweeper
from app.core.config import get_settings
from app.core.limiter import limit_writes
from app.schemas.overview import OrphanSweepRequest, OrphanSweepResponse

router = APIRouter()


@router.post("/orphan-sweep", response_model=OrphanSweepResponse)
@limit_writes
async def sweep_orphans(
    request: Request,
    _: CurrentAdmin,
    sweeper: Annotated[OrphanSweeper, Depends(get_orphan_sweeper)],
    body: OrphanSweepRequest | None = None,
):
    """List blobs no upload refers to; unless dry_run, remove those past the grace period."""
    body = body or OrphanSweepRequest()
    minutes = (
        body.grace_minutes
        if body.grace_minutes is not None
        else get_settings().orphan_sweep_grace_minutes
    )
    report = await sweeper.sweep_orphans(
        dry_run=body.dry_run, grace=timedelta(minutes=max(minutes, 0))
    )
    return OrphanSweepResponse.from_report(report)
