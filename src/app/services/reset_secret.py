"""
One-time password reset secrets.

The plaintext goes to the user out-of-band; only its SHA-256 digest
is stored on the user record.
"""

import hashlib
import hmac
import secrets
from typing import Tuple

from config import ApplicationConfig


def hash_reset_secret(plaintext: str) -> str:
    return hashlib.sha256(plaintext.encode()).hexdigest()


def generate_reset_secret() -> Tuple[str, str]:
    """
    Generate a reset secret.

    Returns:
        (plaintext, sha256 hex digest of plaintext)
    """
    plaintext = secrets.token_hex(ApplicationConfig.RESET_TOKEN_BYTES)
    return plaintext, hash_reset_secret(plaintext)


def match_reset_secret(candidate: str, stored_hash: str) -> bool:
    if not candidate or not stored_hash:
        return False
    return hmac.compare_digest(hash_reset_secret(candidate), stored_hash)
