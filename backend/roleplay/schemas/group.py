"""Pydantic schemas for Groups."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import Field

from roleplay.schemas.base import CamelModel
from roleplay.schemas.user import UserOut, UserSummary


class GroupCreate(CamelModel):
    name: str = Field(min_length=1, max_length=150)
    description: str = Field(min_length=1)
    chronic: str = Field(min_length=1)
    location: str = Field(min_length=1)
    schedule: str = Field(min_length=1)
    master: int


class GroupUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = None
    chronic: Optional[str] = None
    location: Optional[str] = None
    schedule: Optional[str] = None
    master: Optional[int] = None


class GroupOut(CamelModel):
    id: int
    name: str
    description: str
    chronic: str
    location: str
    schedule: str
    master: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    master_user: Optional[UserSummary] = None
    players: list[UserOut] = []


class GroupEnvelope(CamelModel):
    group: GroupOut


class GroupListEnvelope(CamelModel):
    groups: list[GroupOut]
