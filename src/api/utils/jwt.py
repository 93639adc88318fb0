from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig

SESSION_COOKIE_NAME = "jwt"


def generate_jwt(user_id: UUID) -> str:
    """
    Generate session JWT

    Args:
        user_id: User UUID

    Returns:
        JWT token string (HS256, JWT_EXPIRE_DAYS expiry)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "exp": now + timedelta(days=ApplicationConfig.JWT_EXPIRE_DAYS),
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
