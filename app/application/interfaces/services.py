"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import Protocol


# Notification channel interface (post-upload e-mail)
class INotificationChannel(Protocol):
    """Protocol for delivering one HTML notification to one address."""

    async def send(self, address: str, subject: str, html: str) -> None:
        """Deliver the message. Raises NotificationException on failure."""


# Password hashing interface (admin login)
class IPasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...


# Notification renderer interface (subject + HTML body)
class INotificationRenderer(Protocol):
    def render(
        self,
        *,
        process_number: int,
        category_name: str,
        file_count: int,
        timestamp: str,
        note: str | None = None,
    ) -> tuple[str, str]:
        """Return (subject, html)."""
