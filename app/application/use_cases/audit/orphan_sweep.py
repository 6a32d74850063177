"""Orphan sweep: find (and optionally remove) blobs that no upload row refers to.

Orphans come from a blob write whose metadata write then failed, or from an
upload row deleted while its blob stayed behind. Blobs younger than the grace
period are never touched; they may belong to a batch still in progress.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from app.application.dtos.overview import OrphanSweepReport
from app.domain.exceptions import IntakeException
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced
from app.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IUploadRepository
    from app.application.interfaces.storage import IBlobStore

logger = get_logger(__name__)

REMOVE_BATCH_SIZE = 100


class OrphanSweeper:
    """Reconciles the blob store against the upload table."""

    def __init__(
        self,
        blob_store: IBlobStore,
        upload_repo: IUploadRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._blob_store = blob_store
        self._upload_repo = upload_repo
        self._clock = clock

    @traced("audit.sweep_orphans")
    async def sweep_orphans(
        self,
        *,
        dry_run: bool = True,
        grace: timedelta = timedelta(hours=1),
    ) -> OrphanSweepReport:
        """List orphaned blobs; unless dry_run, remove those older than grace.

        A failed removal batch is reported in errors and the sweep continues.
        """
        blobs = await self._blob_store.list_paths()
        recorded = await self._upload_repo.list_file_paths()
        cutoff = self._clock() - grace

        orphans = [b for b in blobs if b.path not in recorded]
        expired = tuple(b.path for b in orphans if ensure_utc(b.last_modified) <= cutoff)
        young = tuple(b.path for b in orphans if ensure_utc(b.last_modified) > cutoff)

        removed: list[str] = []
        errors: list[str] = []
        if not dry_run:
            for start in range(0, len(expired), REMOVE_BATCH_SIZE):
                chunk = list(expired[start : start + REMOVE_BATCH_SIZE])
                try:
                    await self._blob_store.remove(chunk)
                except IntakeException as e:
                    logger.warning("Orphan removal failed for %d blob(s): %s", len(chunk), e.message)
                    errors.append(e.message)
                    continue
                removed.extend(chunk)

        logger.info(
            "Orphan sweep: %d blob(s) scanned, %d orphaned, %d removed, %d within grace (dry_run=%s)",
            len(blobs),
            len(orphans),
            len(removed),
            len(young),
            dry_run,
        )
        return OrphanSweepReport(
            scanned=len(blobs),
            orphaned=tuple(b.path for b in orphans),
            removed=tuple(removed),
            kept_within_grace=young,
            dry_run=dry_run,
            errors=tuple(errors),
        )
