"""Pydantic schemas for GroupRequests."""
from datetime import datetime
from typing import Optional

from roleplay.models.group_request import GroupRequestStatus
from roleplay.schemas.base import CamelModel


class GroupRequestOut(CamelModel):
    id: int
    group_id: int
    user_id: int
    status: GroupRequestStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RequestGroupOut(CamelModel):
    name: str
    master: int


class RequestUserOut(CamelModel):
    username: str


class GroupRequestDetailOut(CamelModel):
    """A pending request as shown to the group's master."""

    id: int
    group_id: int
    user_id: int
    status: GroupRequestStatus
    group: RequestGroupOut
    user: RequestUserOut


class GroupRequestEnvelope(CamelModel):
    group_request: GroupRequestOut


class GroupRequestListEnvelope(CamelModel):
    group_requests: list[GroupRequestDetailOut]
