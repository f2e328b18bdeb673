# src/auth/schemas.py

from typing import Optional
from pydantic import BaseModel


class Identity(BaseModel):
    """Authenticated caller as asserted by the identity provider's token."""
    user_id: str
    email: Optional[str] = None


class MeResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    role: Optional[str] = None
    name: Optional[str] = None
    has_profile: bool
