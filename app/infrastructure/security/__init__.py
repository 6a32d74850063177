"""Security: administrator access tokens and password hashing."""

from app.infrastructure.security.jwt import (
    AdminClaims,
    create_access_token,
    decode_access_token,
)
from app.infrastructure.security.password import (
    BcryptPasswordHasher,
    get_password_hash,
    verify_password,
)

__all__ = [
    "AdminClaims",
    "BcryptPasswordHasher",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
