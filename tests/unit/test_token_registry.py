"""TokenRegistry.resolve with a mocked token repository."""

from unittest.mock import AsyncMock

import pytest

from app.application.services.token_registry import TokenRegistry
from app.domain.exceptions import InvalidTokenException, ValidationException
from tests.factories import make_token


async def test_resolve_returns_active_token() -> None:
    repo = AsyncMock()
    repo.get_by_secret = AsyncMock(return_value=make_token(secret="tok_abc123"))
    token = await TokenRegistry(repo).resolve("  tok_abc123 ")
    assert token.token == "tok_abc123"
    repo.get_by_secret.assert_awaited_once_with("tok_abc123")


@pytest.mark.parametrize("secret", [None, "", "   "])
async def test_resolve_empty_secret_is_validation_error(secret: str | None) -> None:
    repo = AsyncMock()
    with pytest.raises(ValidationException) as exc_info:
        await TokenRegistry(repo).resolve(secret)
    assert exc_info.value.details == {"field": "token"}
    repo.get_by_secret.assert_not_awaited()


async def test_unknown_and_inactive_tokens_raise_the_same_error() -> None:
    repo = AsyncMock()
    repo.get_by_secret = AsyncMock(return_value=None)
    with pytest.raises(InvalidTokenException) as unknown:
        await TokenRegistry(repo).resolve("tok_nope")

    repo.get_by_secret = AsyncMock(return_value=make_token(active=False))
    with pytest.raises(InvalidTokenException) as inactive:
        await TokenRegistry(repo).resolve("tok_abc123")

    assert unknown.value.message == inactive.value.message
    assert unknown.value.error_code == "INVALID_TOKEN"
