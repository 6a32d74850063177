"""Administrator password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a
fixed-length input so long passwords are not silently truncated.
"""

import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password."""
    try:
        return bool(bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8")))
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")


class BcryptPasswordHasher:
    """IPasswordHasher over the module functions. Both calls are CPU-bound; run them in a thread."""

    def hash(self, password: str) -> str:
        return get_password_hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return verify_password(password, hashed)
