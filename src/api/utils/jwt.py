import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def session_token_ttl() -> timedelta:
    return timedelta(days=ApplicationConfig.JWT_EXPIRE_DAYS)


def generate_session_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """
    Generate a session token

    Args:
        user_id: User UUID
        expires_delta: Token lifetime, defaults to JWT_EXPIRE_DAYS

    Returns:
        JWT token string carrying the user id, a unique jti, iat and exp
    """
    now = datetime.now(UTC)
    payload = {
        "id": str(user_id),
        "jti": secrets.token_hex(16),
        "iat": now,
        "exp": now + (expires_delta if expires_delta is not None else session_token_ttl()),
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_session_token(token: str) -> Optional[dict]:
    """
    Verify and decode a session token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict, or None if the signature is invalid, the token
        expired, or it does not carry a user id
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
    except JWTError:
        return None

    if not payload.get("id"):
        return None
    try:
        UUID(payload["id"])
    except (ValueError, TypeError):
        return None
    return payload
