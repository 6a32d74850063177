"""Create an administrator account (Postgres only).

Usage:
    uv run python -m scripts.create_admin_user <email> [password]
If password is omitted, a random one is printed.
"""

import asyncio
import secrets
import sys

from app.application.services.admin_auth_service import AdminAuthService
from app.core.config import get_settings
from app.domain.exceptions import IntakeException
from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.persistence.repositories import AdminUserRepository
from app.infrastructure.security import BcryptPasswordHasher


async def main() -> None:
    """Create the administrator; exit 1 on bad input or duplicate e-mail."""
    if len(sys.argv) < 2:
        print(
            "Usage: uv run python -m scripts.create_admin_user <email> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    email = sys.argv[1]
    password = sys.argv[2] if len(sys.argv) > 2 else secrets.token_urlsafe(12)

    get_settings()
    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            async with session.begin():
                service = AdminAuthService(AdminUserRepository(session), BcryptPasswordHasher())
                admin = await service.register(email, password)
    except IntakeException as e:
        print(f"Could not create administrator: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await dispose_engine()

    print(f"Created administrator: {admin.id} ({admin.email})")
    if len(sys.argv) <= 2:
        print(f"Password: {password}")


if __name__ == "__main__":
    asyncio.run(main())
