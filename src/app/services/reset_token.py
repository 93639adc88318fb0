"""
Password reset secrets.

The plaintext secret only ever travels inside the emailed link; the database
holds its SHA-256 digest, which is what lookups compare against.
"""

import hashlib
import secrets
from typing import Tuple

RESET_SECRET_BYTES = 32


def digest_reset_secret(secret: str) -> str:
    """SHA-256 hex digest of a reset secret"""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def generate_reset_secret() -> Tuple[str, str]:
    """
    Generate a new reset secret.

    Returns:
        Tuple of (plaintext secret as 64 hex chars, digest for storage)
    """
    secret = secrets.token_hex(RESET_SECRET_BYTES)
    return secret, digest_reset_secret(secret)
