"""S3-compatible object storage (AWS S3, MinIO, etc.) for uploaded blobs."""

from __future__ import annotations

import asyncio
from urllib.parse import quote

import boto3
from botocore.exceptions import ClientError

from app.application.dtos.upload import BlobEntry
from app.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageDeleteError,
    StorageListError,
    StorageUploadError,
)
from app.shared.utils.datetime import ensure_utc

DELETE_BATCH_SIZE = 1000


class S3StorageService:
    """S3-compatible storage with server-side encryption.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces. Objects are read through public URLs
    (public_base_url, or the virtual-hosted bucket URL).
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            public_base_url: Base URL objects are publicly served from.
        """
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        if public_base_url:
            self.public_base_url = public_base_url.rstrip("/")
        elif endpoint_url:
            self.public_base_url = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            self.public_base_url = f"https://{bucket}.s3.{region}.amazonaws.com"
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        """Upload; raise StorageAlreadyExistsError if the key exists (no overwrite)."""
        def _put() -> None:
            try:
                self._client.head_object(Bucket=self.bucket, Key=path)
                raise StorageAlreadyExistsError(path)
            except ClientError as e:
                if e.response["Error"]["Code"] not in ("404", "NoSuchKey"):
                    raise
            self._client.put_object(
                Bucket=self.bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
                ServerSideEncryption="AES256",
            )

        try:
            await asyncio.to_thread(_put)
        except StorageAlreadyExistsError:
            raise
        except Exception as e:
            raise StorageUploadError(path, str(e)) from e

    async def remove(self, paths: list[str]) -> None:
        """Delete objects in batches. Missing keys are not an error in S3."""
        def _delete(batch: list[str]) -> None:
            resp = self._client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": p} for p in batch], "Quiet": True},
            )
            errors = resp.get("Errors") or []
            if errors:
                first = errors[0]
                raise StorageDeleteError(first.get("Key", ""), first.get("Message", "delete failed"))

        for start in range(0, len(paths), DELETE_BATCH_SIZE):
            batch = paths[start : start + DELETE_BATCH_SIZE]
            try:
                await asyncio.to_thread(_delete, batch)
            except StorageDeleteError:
                raise
            except Exception as e:
                raise StorageDeleteError(batch[0], str(e)) from e

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url}/{quote(path)}"

    async def list_paths(self, prefix: str = "") -> list[BlobEntry]:
        def _list() -> list[BlobEntry]:
            paginator = self._client.get_paginator("list_objects_v2")
            entries: list[BlobEntry] = []
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for obj in page.get("Contents") or []:
                    entries.append(
                        BlobEntry(path=obj["Key"], last_modified=ensure_utc(obj["LastModified"]))
                    )
            return entries

        try:
            return await asyncio.to_thread(_list)
        except Exception as e:
            raise StorageListError(prefix, str(e)) from e
