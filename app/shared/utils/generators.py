"""ID and value generators (CUID row ids, upload token secrets)."""

import secrets
import string

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

TOKEN_PREFIX = "tok_"
TOKEN_RANDOM_LENGTH = 16
_TOKEN_ALPHABET = string.digits + string.ascii_lowercase


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_token_secret() -> str:
    """Generate a new upload token secret, e.g. ``tok_k3j9x0a1b2c3d4e5``.

    Base-36 lowercase so the secret is easy to read out and type on a phone.
    """
    rand = "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_RANDOM_LENGTH))
    return f"{TOKEN_PREFIX}{rand}"
