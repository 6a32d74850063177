"""UploadPipeline batch semantics: ordered, sequential, stop at first failure."""

from unittest.mock import AsyncMock

import pytest

from app.application.use_cases.intake.upload_pipeline import (
    UploadPipeline,
    build_storage_path,
    content_type_for,
    validate_batch,
)
from app.domain.enums import UploadStep
from app.domain.exceptions import PersistenceException, ValidationException
from app.infrastructure.exceptions import StorageUploadError
from app.shared.utils.datetime import to_timestamp_ms
from tests.factories import T0, make_file, make_process, make_upload

TS = to_timestamp_ms(T0)


def _pipeline(blob_store: AsyncMock, upload_repo: AsyncMock) -> UploadPipeline:
    return UploadPipeline(blob_store, upload_repo, clock=lambda: T0)


def _recording_repo() -> AsyncMock:
    repo = AsyncMock()

    async def add_upload(process_id, file_path, mime_type, size):
        return make_upload(
            upload_id=f"u-{file_path}", process_id=process_id, file_path=file_path, size=size
        )

    repo.add_upload = AsyncMock(side_effect=add_upload)
    return repo


class TestBuildStoragePath:
    def test_layout(self) -> None:
        assert build_storage_path(42, 0, "a.jpg", 1700000000000) == "42/1700000000000_0_a.jpg"

    def test_name_is_sanitized(self) -> None:
        assert build_storage_path(42, 1, "b png", 5) == "42/5_1_b_png"

    def test_traversal_cannot_escape_process_folder(self) -> None:
        path = build_storage_path(7, 0, "../../etc/passwd", 1)
        assert path.startswith("7/1_0_")
        assert path.count("/") == 1


class TestContentType:
    def test_missing_type_defaults_to_image_wildcard(self) -> None:
        assert content_type_for(make_file(mime_type=None)) == "image/*"
        assert content_type_for(make_file(mime_type="  ")) == "image/*"

    def test_given_type_is_kept(self) -> None:
        assert content_type_for(make_file(mime_type="image/png")) == "image/png"


class TestValidateBatch:
    def test_empty_batch_rejected(self) -> None:
        with pytest.raises(ValidationException, match="At least one file"):
            validate_batch([], max_file_size=10, images_only=True)

    def test_oversized_file_rejected(self) -> None:
        with pytest.raises(ValidationException, match="maximum size"):
            validate_batch([make_file(data=b"x" * 11)], max_file_size=10, images_only=False)

    def test_non_image_rejected_when_images_only(self) -> None:
        files = [make_file("doc.pdf", mime_type="application/pdf")]
        with pytest.raises(ValidationException, match="not an image"):
            validate_batch(files, max_file_size=100, images_only=True)
        validate_batch(files, max_file_size=100, images_only=False)


async def test_two_files_stored_in_order() -> None:
    """Process #42 with a.jpg and 'b png' stores both under sanitized paths."""
    blob_store = AsyncMock()
    repo = _recording_repo()
    process = make_process()
    files = [make_file("a.jpg"), make_file("b png", mime_type="image/png")]

    result = await _pipeline(blob_store, repo).add_files(process, files)

    assert result.succeeded
    assert result.stored_count == 2
    assert result.message == "2 of 2 files uploaded"
    paths = [s.upload.file_path for s in result.stored]
    assert paths == [f"42/{TS}_0_a.jpg", f"42/{TS}_1_b_png"]
    assert [c.args[0] for c in blob_store.put.await_args_list] == paths
    assert blob_store.put.await_args_list[1].args[2] == "image/png"
    repo.add_upload.assert_any_await("p42", f"42/{TS}_0_a.jpg", "image/jpeg", 3)


async def test_second_file_storage_failure_keeps_first_and_reports_index() -> None:
    blob_store = AsyncMock()
    blob_store.put = AsyncMock(
        side_effect=[None, StorageUploadError(f"42/{TS}_1_b_png", "disk full")]
    )
    repo = _recording_repo()

    result = await _pipeline(blob_store, repo).add_files(
        make_process(), [make_file("a.jpg"), make_file("b png")]
    )

    assert not result.succeeded
    assert result.stored_count == 1
    assert result.failed is not None
    assert result.failed.index == 1
    assert result.failed.step == UploadStep.STORAGE
    assert result.message == "Upload 2 of 2 failed (b png): storage error"
    assert repo.add_upload.await_count == 1


async def test_files_after_failure_are_skipped_not_attempted() -> None:
    blob_store = AsyncMock()
    blob_store.put = AsyncMock(side_effect=[StorageUploadError("x", "boom")])
    repo = _recording_repo()
    files = [make_file("1.jpg"), make_file("2.jpg"), make_file("3.jpg")]

    result = await _pipeline(blob_store, repo).add_files(make_process(), files)

    assert result.failed is not None and result.failed.index == 0
    assert result.skipped == ("2.jpg", "3.jpg")
    assert blob_store.put.await_count == 1
    repo.add_upload.assert_not_awaited()


async def test_metadata_failure_is_reported_as_metadata_step() -> None:
    blob_store = AsyncMock()
    repo = AsyncMock()
    repo.add_upload = AsyncMock(side_effect=PersistenceException("add upload", "IntegrityError"))

    result = await _pipeline(blob_store, repo).add_files(make_process(), [make_file("a.jpg")])

    assert result.failed is not None
    assert result.failed.step == UploadStep.METADATA
    assert result.message == "Upload 1 of 1 failed (a.jpg): metadata error"
    blob_store.put.assert_awaited_once()


async def test_unexpected_error_message_is_generic() -> None:
    blob_store = AsyncMock()
    blob_store.put = AsyncMock(side_effect=OSError("/secret/internal/path"))
    result = await _pipeline(blob_store, AsyncMock()).add_files(
        make_process(), [make_file("a.jpg")]
    )
    assert result.failed is not None
    assert result.failed.message == "Unexpected error"


async def test_each_recorded_upload_is_committed_before_the_next_file() -> None:
    events: list[str] = []
    blob_store = AsyncMock()
    blob_store.put = AsyncMock(side_effect=lambda path, data, ct: events.append(f"put {path}"))
    repo = AsyncMock()

    async def add_upload(process_id, file_path, mime_type, size):
        events.append(f"row {file_path}")
        return make_upload(process_id=process_id, file_path=file_path, size=size)

    repo.add_upload = AsyncMock(side_effect=add_upload)
    transaction = AsyncMock()
    transaction.commit = AsyncMock(side_effect=lambda: events.append("commit"))

    pipeline = UploadPipeline(blob_store, repo, clock=lambda: T0, transaction=transaction)
    result = await pipeline.add_files(make_process(), [make_file("a.jpg"), make_file("b.jpg")])

    assert result.succeeded
    assert events == [
        f"put 42/{TS}_0_a.jpg",
        f"row 42/{TS}_0_a.jpg",
        "commit",
        f"put 42/{TS}_1_b.jpg",
        f"row 42/{TS}_1_b.jpg",
        "commit",
    ]


async def test_commit_failure_is_a_metadata_failure_and_stops_the_batch() -> None:
    blob_store = AsyncMock()
    repo = _recording_repo()
    transaction = AsyncMock()
    transaction.commit = AsyncMock(side_effect=PersistenceException("commit", "OperationalError"))

    pipeline = UploadPipeline(blob_store, repo, clock=lambda: T0, transaction=transaction)
    result = await pipeline.add_files(make_process(), [make_file("a.jpg"), make_file("b.jpg")])

    assert result.stored_count == 0
    assert result.failed is not None
    assert result.failed.index == 0
    assert result.failed.step == UploadStep.METADATA
    assert result.skipped == ("b.jpg",)
    assert blob_store.put.await_count == 1


async def test_failed_row_is_not_committed() -> None:
    repo = AsyncMock()
    repo.add_upload = AsyncMock(side_effect=PersistenceException("add upload", "IntegrityError"))
    transaction = AsyncMock()

    pipeline = UploadPipeline(AsyncMock(), repo, clock=lambda: T0, transaction=transaction)
    await pipeline.add_files(make_process(), [make_file("a.jpg")])

    transaction.commit.assert_not_awaited()
