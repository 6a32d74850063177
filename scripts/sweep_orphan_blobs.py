"""Find (and optionally remove) blobs that no upload row refers to.

Usage:
    uv run python -m scripts.sweep_orphan_blobs [--delete] [--grace-minutes N]
Without --delete this is a dry run that only lists orphans. Blobs younger
than the grace period (default ORPHAN_SWEEP_GRACE_MINUTES) are never removed.
"""

import argparse
import asyncio
import sys
from datetime import timedelta

from app.application.use_cases.audit import OrphanSweeper
from app.core.config import get_settings
from app.domain.exceptions import IntakeException
from app.infrastructure.external.storage import StorageFactory
from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.persistence.repositories import UploadRepository
from app.shared.telemetry.logging import setup_logging


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--delete", action="store_true", help="remove orphans past the grace period")
    parser.add_argument("--grace-minutes", type=int, default=None)
    return parser.parse_args(argv)


async def main(argv: list[str]) -> None:
    args = _parse_args(argv)
    settings = get_settings()
    setup_logging()
    grace_minutes = (
        args.grace_minutes
        if args.grace_minutes is not None
        else settings.orphan_sweep_grace_minutes
    )
    blob_store = StorageFactory.create_storage_service(settings)
    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            sweeper = OrphanSweeper(blob_store, UploadRepository(session))
            report = await sweeper.sweep_orphans(
                dry_run=not args.delete,
                grace=timedelta(minutes=max(grace_minutes, 0)),
            )
    except IntakeException as e:
        print(f"Sweep failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await dispose_engine()

    for path in report.orphaned:
        marker = "removed" if path in report.removed else (
            "young" if path in report.kept_within_grace else "orphan"
        )
        print(f"{marker:8} {path}")
    print(
        f"Scanned {report.scanned} blob(s): {len(report.orphaned)} orphaned, "
        f"{len(report.removed)} removed (dry_run={report.dry_run})"
    )
    for error in report.errors:
        print(f"error: {error}", file=sys.stderr)
    if report.errors:
        sys.exit(2)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
