"""Token registry: resolve an intake secret to its token."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.exceptions import InvalidTokenException, ValidationException
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.token import TokenResult
    from app.application.interfaces.repositories import ITokenRepository

logger = get_logger(__name__)


class TokenRegistry:
    """Resolves opaque token secrets. Read-only."""

    def __init__(self, token_repo: ITokenRepository) -> None:
        self._token_repo = token_repo

    async def resolve(self, secret: str | None) -> TokenResult:
        """Return the active token matching secret.

        Unknown and inactive tokens raise the same exception so callers cannot
        tell the two apart.

        Raises:
            ValidationException: secret is empty after trimming.
            InvalidTokenException: no token matches, or it is inactive.
        """
        value = (secret or "").strip()
        if not value:
            raise ValidationException("Token is required", field="token")
        token = await self._token_repo.get_by_secret(value)
        if token is None or not token.active:
            logger.info("Rejected intake token (unknown or inactive)")
            raise InvalidTokenException()
        return token
