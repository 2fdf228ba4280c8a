"""Pydantic schemas for Sessions (sign-in / sign-out)."""
from datetime import datetime
from typing import Optional

from roleplay.schemas.base import CamelModel
from roleplay.schemas.user import UserOut


class SessionCreate(CamelModel):
    # Missing credentials are reported as 400 by the service, not 422.
    email: Optional[str] = None
    password: Optional[str] = None


class TokenOut(CamelModel):
    type: str = "bearer"
    token: str
    expires_at: datetime


class SessionOut(CamelModel):
    user: UserOut
    token: TokenOut
