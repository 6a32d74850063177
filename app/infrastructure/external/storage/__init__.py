"""Blob store: local filesystem and S3-compatible backends.

Factory creates the backend from app.core.config. Implementations are loaded
lazily inside StorageFactory.create_storage_service() so boto3 is only
imported when the s3 backend is selected.

Implementations satisfy IBlobStore (put, remove, public_url, list_paths).
"""

from app.infrastructure.external.storage.factory import StorageFactory

__all__ = [
    "StorageFactory",
]
