# src/auth/auth_service.py

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from src.common.config import settings
from src.auth.schemas import Identity


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    """Create a JWT token including an expiration date."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta if expires_delta else timedelta(minutes=15))
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt


def decode_identity(token: str) -> Optional[Identity]:
    """
    Verify a bearer token and return the identity it carries.

    Returns None for expired, malformed or unsigned tokens and for tokens
    without a subject.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None
    return Identity(user_id=str(user_id), email=payload.get("email"))
