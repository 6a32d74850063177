"""Blob store interface (port). Implementations live in infrastructure/external/storage."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.upload import BlobEntry


class IBlobStore(Protocol):
    """Protocol for the blob store holding uploaded files.

    Paths are relative keys such as '42/1718000000000_0_a.jpg'.
    """

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        """Store data under path. Never overwrites; raises StorageException on failure."""

    async def remove(self, paths: list[str]) -> None:
        """Remove the given paths. Missing paths are ignored; raises StorageException on failure."""

    def public_url(self, path: str) -> str:
        """Return the public URL for path."""

    async def list_paths(self, prefix: str = "") -> list[BlobEntry]:
        """List stored blobs under prefix."""
