"""Local filesystem blob store with path validation and atomic, non-overwriting writes."""

from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path
from urllib.parse import quote

import aiofiles
import aiofiles.os

from app.application.dtos.upload import BlobEntry
from app.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageDeleteError,
    StorageListError,
    StoragePermissionError,
    StorageUploadError,
)
from app.shared.utils.datetime import from_timestamp_utc

TEMP_PREFIX = ".tmp_"
PUBLIC_PATH_PREFIX = "/files"


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + link, so
    an existing blob is never replaced. Files are served by the app under
    /files (see main.py) and public_url points there.
    """

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files.
            base_url: Public base URL of the API (e.g. https://intake.example.com).
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else ""
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, path: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / path).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(path, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(path, "path_validation")
        return full_path

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        """Write atomically; raise StorageAlreadyExistsError if path is taken."""
        target_path = self._get_full_path(path)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent, prefix=TEMP_PREFIX, suffix=target_path.suffix
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                # link fails with FileExistsError instead of replacing the target
                await aiofiles.os.link(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except FileExistsError as e:
            raise StorageAlreadyExistsError(path) from e
        except Exception as e:
            raise StorageUploadError(path, str(e)) from e

    async def remove(self, paths: list[str]) -> None:
        """Delete files and prune empty process folders. Missing files are ignored."""
        for path in paths:
            file_path = self._get_full_path(path)
            try:
                if not file_path.exists():
                    continue
                await aiofiles.os.remove(file_path)
            except Exception as e:
                raise StorageDeleteError(path, str(e)) from e
            parent = file_path.parent
            while parent != self.storage_root:
                try:
                    if not any(parent.iterdir()):
                        parent.rmdir()
                        parent = parent.parent
                    else:
                        break
                except OSError:
                    break

    def public_url(self, path: str) -> str:
        return f"{self.base_url}{PUBLIC_PATH_PREFIX}/{quote(path)}"

    def _walk(self, prefix: str) -> list[BlobEntry]:
        root = self.storage_root / prefix if prefix else self.storage_root
        entries: list[BlobEntry] = []
        for dirpath, _dirnames, filenames in os.walk(root):
            for name in filenames:
                if name.startswith(TEMP_PREFIX):
                    continue
                full = Path(dirpath) / name
                entries.append(
                    BlobEntry(
                        path=full.relative_to(self.storage_root).as_posix(),
                        last_modified=from_timestamp_utc(full.stat().st_mtime),
                    )
                )
        return entries

    async def list_paths(self, prefix: str = "") -> list[BlobEntry]:
        if prefix:
            self._get_full_path(prefix)
        try:
            return await asyncio.to_thread(self._walk, prefix)
        except Exception as e:
            raise StorageListError(prefix, str(e)) from e
