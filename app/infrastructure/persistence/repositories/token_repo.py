"""Token repository: tokens and their department memberships. Returns application DTOs."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.token import TokenMembership, TokenResult
from app.domain.exceptions import DuplicateResourceException, ValidationException
from app.infrastructure.persistence.models.token import Token, TokenDepartment
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _token_to_result(t: Token, department_ids: Iterable[str] = ()) -> TokenResult:
    """Map ORM Token to TokenResult."""
    return TokenResult(
        id=t.id,
        token=t.token,
        label=t.label,
        email=t.email,
        active=t.active,
        created_at=ensure_utc(t.created_at),
        department_ids=tuple(sorted(department_ids)),
    )


class TokenRepository(BaseRepository[Token]):
    """Token repository. Tokens are never deleted; the secret is never updated."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Token)

    async def _department_ids_for(self, token_ids: list[str]) -> dict[str, list[str]]:
        if not token_ids:
            return {}
        result = await self.db.execute(
            select(TokenDepartment.token_id, TokenDepartment.department_id).where(
                TokenDepartment.token_id.in_(token_ids)
            )
        )
        by_token: dict[str, list[str]] = defaultdict(list)
        for token_id, department_id in result.all():
            by_token[token_id].append(department_id)
        return by_token

    async def _with_departments(self, token: Token) -> TokenResult:
        ids = await self._department_ids_for([token.id])
        return _token_to_result(token, ids.get(token.id, []))

    async def get_by_secret(self, secret: str) -> TokenResult | None:
        result = await self.db.execute(select(Token).where(Token.token == secret))
        token = result.scalar_one_or_none()
        return await self._with_departments(token) if token else None

    async def get_by_id(self, token_id: str) -> TokenResult | None:  # type: ignore[override]
        token = await super().get_by_id(token_id)
        return await self._with_departments(token) if token else None

    async def list_tokens(self, limit: int = 1000) -> list[TokenResult]:
        result = await self.db.execute(
            select(Token).order_by(Token.created_at.desc(), Token.id).limit(limit)
        )
        tokens = list(result.scalars().all())
        ids = await self._department_ids_for([t.id for t in tokens])
        return [_token_to_result(t, ids.get(t.id, [])) for t in tokens]

    async def list_memberships(self, limit: int = 10000) -> list[TokenMembership]:
        result = await self.db.execute(
            select(TokenDepartment.token_id, TokenDepartment.department_id).limit(limit)
        )
        return [TokenMembership(token_id=t, department_id=d) for t, d in result.all()]

    async def _write_memberships(self, token_id: str, department_ids: list[str]) -> None:
        try:
            async with self.db.begin_nested():
                await self.db.execute(
                    delete(TokenDepartment).where(TokenDepartment.token_id == token_id)
                )
                self.db.add_all(
                    TokenDepartment(token_id=token_id, department_id=d)
                    for d in department_ids
                )
                await self.db.flush()
        except IntegrityError:
            raise ValidationException("Unknown department", field="department_ids")

    async def create_token(
        self,
        secret: str,
        *,
        label: str | None = None,
        email: str | None = None,
        department_ids: list[str] | None = None,
    ) -> TokenResult:
        """Create token; raise DuplicateResourceException if the secret collides."""
        token = Token(token=secret, label=label, email=email, active=True)
        try:
            created = await self.create(token)
        except IntegrityError:
            raise DuplicateResourceException("token", secret)
        if department_ids:
            await self._write_memberships(created.id, department_ids)
        return _token_to_result(created, department_ids or [])

    async def update_token(
        self, token_id: str, *, label: str | None, email: str | None
    ) -> TokenResult | None:
        token = await super().get_by_id(token_id)
        if not token:
            return None
        token.label = label
        token.email = email
        updated = await self.update(token)
        return await self._with_departments(updated)

    async def set_active(self, token_id: str, active: bool) -> TokenResult | None:
        token = await super().get_by_id(token_id)
        if not token:
            return None
        token.active = active
        updated = await self.update(token)
        return await self._with_departments(updated)

    async def replace_departments(
        self, token_id: str, department_ids: list[str]
    ) -> TokenResult | None:
        token = await super().get_by_id(token_id)
        if not token:
            return None
        await self._write_memberships(token.id, department_ids)
        return _token_to_result(token, department_ids)
