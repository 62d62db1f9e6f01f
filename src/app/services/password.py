"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

import bcrypt

from src.libs.result import Error, Result, Return

# Pre-computed hash used to keep login timing flat for unknown emails
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12)).decode()


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted, work factor 12)."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(12)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def burn_password_check(password: str) -> None:
    """Run a bcrypt check against a throwaway hash."""
    verify_password(password, _DUMMY_HASH)


MIN_PASSWORD_LENGTH = 6


def validate_password(password: str) -> Result[None]:
    """
    Validate password complexity.

    Returns:
        Result with None if valid, or Error(VALIDATION_ERROR)
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                "VALIDATION_ERROR",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            )
        )
    return Return.ok(None)
