"""Group management API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from roleplay.database import get_db
from roleplay.dependencies import get_current_user
from roleplay.models.user import User
from roleplay.schemas.group import GroupCreate, GroupUpdate, GroupEnvelope, GroupListEnvelope
from roleplay.services import group_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=GroupListEnvelope)
def list_groups(
    user: Optional[int] = Query(None, description="Only groups this user plays in"),
    text: Optional[str] = Query(None, description="Search in name and description"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List groups with their players and master."""
    return {"groups": group_service.list_groups(db, user_id=user, text=text)}


@router.post("", response_model=GroupEnvelope, status_code=status.HTTP_201_CREATED)
def create_group(
    payload: GroupCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a group. The master is automatically added as a player."""
    return {"group": group_service.create_group(db, payload.model_dump())}


@router.put("/{group_id}", response_model=GroupEnvelope)
def update_group(
    group_id: int,
    payload: GroupUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update a group (master only)."""
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    return {"group": group_service.update_group(db, group_id, current_user.id, updates)}


@router.delete("/{group_id}/players/{player_id}", status_code=status.HTTP_200_OK)
def remove_player(
    group_id: int,
    player_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Remove a player from the group. The master cannot be removed."""
    group_service.remove_player(db, group_id, player_id, current_user.id)
    return {}


@router.delete("/{group_id}", status_code=status.HTTP_200_OK)
def delete_group(
    group_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a group and its roster."""
    group_service.delete_group(db, group_id, current_user.id)
    return {}
