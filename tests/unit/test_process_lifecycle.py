"""ProcessLifecycleManager.start_process: input checks and store delegation."""

from unittest.mock import AsyncMock

import pytest

from app.application.use_cases.intake.process_lifecycle import (
    MAX_NOTE_LENGTH,
    ProcessLifecycleManager,
    normalize_note,
)
from app.domain.exceptions import (
    InvalidTokenException,
    PersistenceException,
    ValidationException,
)
from tests.factories import make_process


class TestNormalizeNote:
    def test_trims(self) -> None:
        assert normalize_note("  pallet 3 damaged \n") == "pallet 3 damaged"

    @pytest.mark.parametrize("note", [None, "", "   ", "\t\n"])
    def test_blank_becomes_none(self, note: str | None) -> None:
        assert normalize_note(note) is None


async def test_start_process_passes_trimmed_values_to_store() -> None:
    repo = AsyncMock()
    repo.start_process = AsyncMock(return_value=make_process(note="hello"))
    process = await ProcessLifecycleManager(repo).start_process(
        " tok_abc123 ", " cat1 ", "  hello  "
    )
    assert process.process_number == 42
    repo.start_process.assert_awaited_once_with("tok_abc123", "cat1", "hello")


async def test_blank_note_is_stored_as_none() -> None:
    repo = AsyncMock()
    repo.start_process = AsyncMock(return_value=make_process())
    await ProcessLifecycleManager(repo).start_process("tok_abc123", "cat1", "   ")
    repo.start_process.assert_awaited_once_with("tok_abc123", "cat1", None)


@pytest.mark.parametrize(
    ("token", "category", "field"),
    [("", "cat1", "token"), ("tok_abc123", "  ", "category_id")],
)
async def test_missing_inputs_never_reach_store(token: str, category: str, field: str) -> None:
    repo = AsyncMock()
    with pytest.raises(ValidationException) as exc_info:
        await ProcessLifecycleManager(repo).start_process(token, category)
    assert exc_info.value.details == {"field": field}
    repo.start_process.assert_not_awaited()


async def test_overlong_note_is_rejected() -> None:
    repo = AsyncMock()
    with pytest.raises(ValidationException, match="at most"):
        await ProcessLifecycleManager(repo).start_process(
            "tok_abc123", "cat1", "x" * (MAX_NOTE_LENGTH + 1)
        )
    repo.start_process.assert_not_awaited()


async def test_store_rejection_propagates() -> None:
    repo = AsyncMock()
    repo.start_process = AsyncMock(side_effect=InvalidTokenException())
    with pytest.raises(InvalidTokenException):
        await ProcessLifecycleManager(repo).start_process("tok_gone", "cat1")


async def test_new_process_is_committed_before_returning() -> None:
    repo = AsyncMock()
    repo.start_process = AsyncMock(return_value=make_process())
    transaction = AsyncMock()
    await ProcessLifecycleManager(repo, transaction=transaction).start_process(
        "tok_abc123", "cat1"
    )
    transaction.commit.assert_awaited_once()


async def test_rejected_process_is_not_committed() -> None:
    repo = AsyncMock()
    repo.start_process = AsyncMock(side_effect=InvalidTokenException())
    transaction = AsyncMock()
    with pytest.raises(InvalidTokenException):
        await ProcessLifecycleManager(repo, transaction=transaction).start_process(
            "tok_gone", "cat1"
        )
    transaction.commit.assert_not_awaited()


async def test_commit_failure_raises_persistence_error() -> None:
    repo = AsyncMock()
    repo.start_process = AsyncMock(return_value=make_process())
    transaction = AsyncMock()
    transaction.commit = AsyncMock(side_effect=ConnectionResetError("server closed"))
    with pytest.raises(PersistenceException) as exc_info:
        await ProcessLifecycleManager(repo, transaction=transaction).start_process(
            "tok_abc123", "cat1"
        )
    assert exc_info.value.details == {
        "operation": "start process",
        "reason": "ConnectionResetError",
    }
