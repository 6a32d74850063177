"""DTOs for intake tokens (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class TokenResult:
    """Token read-model (result of resolve, get_by_id, list, create).

    department_ids are the token's memberships, in no particular order.
    """

    id: str
    token: str
    label: str | None
    email: str | None
    active: bool
    created_at: datetime
    department_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def display(self) -> str:
        """Label with the secret in parentheses, or just the secret."""
        return f"{self.label} ({self.token})" if self.label else self.token


@dataclass(frozen=True)
class TokenMembership:
    """One token-department membership row."""

    token_id: str
    department_id: str
