"""Blob store factory: STORAGE_BACKEND selects the local or S3 implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.interfaces.storage import IBlobStore

if TYPE_CHECKING:
    from app.core.config import Settings


def _local_store(settings: Settings) -> IBlobStore:
    from app.infrastructure.external.storage.local_storage import LocalStorageService

    if not settings.storage_root:
        raise ValueError("STORAGE_ROOT is required for the local blob store")
    return LocalStorageService(settings.storage_root, base_url=settings.storage_base_url)


def _s3_store(settings: Settings) -> IBlobStore:
    # boto3 is imported only when this backend is selected
    from app.infrastructure.external.storage.s3_storage import S3StorageService

    if not settings.s3_bucket:
        raise ValueError("S3_BUCKET is required for the s3 blob store")
    secret = settings.s3_secret_key
    return S3StorageService(
        bucket=settings.s3_bucket,
        region=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        access_key=settings.s3_access_key,
        secret_key=secret.get_secret_value() if secret else None,
        public_base_url=settings.s3_public_base_url,
    )


class StorageFactory:
    """Builds the blob store the intake pipeline and the audit routes write to."""

    _builders = {"local": _local_store, "s3": _s3_store}

    @staticmethod
    def create_storage_service(settings: Settings | None = None) -> IBlobStore:
        """Return the configured blob store (settings default to get_settings()).

        Raises:
            ValueError: unknown backend or missing backend config.
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()
        builder = StorageFactory._builders.get(backend)
        if builder is None:
            raise ValueError(
                f"Unknown storage backend '{backend}'. Supported: 'local', 's3'"
            )
        return builder(s)
