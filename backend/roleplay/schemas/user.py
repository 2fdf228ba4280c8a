"""Pydantic schemas for Users."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from roleplay.schemas.base import CamelModel


class UserCreate(CamelModel):
    email: EmailStr
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=4)
    avatar: Optional[str] = None


class UserUpdate(CamelModel):
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(default=None, min_length=1, max_length=100)
    password: Optional[str] = Field(default=None, min_length=4)
    avatar: Optional[str] = None


class UserOut(CamelModel):
    id: int
    email: str
    username: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserSummary(CamelModel):
    id: int
    username: str
