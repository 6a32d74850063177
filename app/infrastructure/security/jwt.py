"""Administrator access tokens (JWT via python-jose).

Claims: sub (admin id), email, scope='admin', iat, exp.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.shared.utils.datetime import from_timestamp_utc, utc_now

ADMIN_SCOPE = "admin"


@dataclass(frozen=True)
class AdminClaims:
    """Verified claims of an administrator access token."""

    admin_id: str
    email: str
    expires_at: datetime


def create_access_token(
    admin_id: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for an administrator.

    Args:
        admin_id: Administrator id (becomes sub).
        email: Administrator e-mail (informational claim).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    now = utc_now()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {
        "sub": admin_id,
        "email": email,
        "scope": ADMIN_SCOPE,
        "iat": now,
        "exp": now + ttl,
    }
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def decode_access_token(token: str) -> AdminClaims:
    """Verify signature, expiry and scope and return the claims.

    Raises:
        AuthenticationException: token invalid, expired, or not an admin token.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise AuthenticationException("Invalid or expired access token") from e
    if payload.get("scope") != ADMIN_SCOPE or not payload.get("sub"):
        raise AuthenticationException("Invalid or expired access token")
    return AdminClaims(
        admin_id=str(payload["sub"]),
        email=str(payload.get("email", "")),
        expires_at=from_timestamp_utc(float(payload["exp"])),
    )
