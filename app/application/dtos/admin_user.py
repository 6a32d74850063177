"""DTOs for administrator accounts (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AdminUserResult:
    """Administrator read-model. No password."""

    id: str
    email: str
    is_active: bool
