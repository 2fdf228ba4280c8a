"""Group join-request API routes."""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from roleplay.database import get_db
from roleplay.dependencies import get_current_user
from roleplay.models.user import User
from roleplay.schemas.group_request import GroupRequestEnvelope, GroupRequestListEnvelope
from roleplay.services import group_request_service

router = APIRouter()


@router.get("/{group_id}/requests", response_model=GroupRequestListEnvelope)
def list_group_requests(
    group_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Pending requests on every group the current user masters."""
    return {"group_requests": group_request_service.list_pending_for_master(db, current_user.id)}


@router.post("/{group_id}/requests", response_model=GroupRequestEnvelope, status_code=status.HTTP_201_CREATED)
def create_group_request(
    group_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Ask to join a group."""
    return {"group_request": group_request_service.create_request(db, group_id, current_user.id)}


@router.post("/{group_id}/requests/{request_id}/accept", response_model=GroupRequestEnvelope)
def accept_group_request(
    group_id: int,
    request_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Accept a pending request and add the user to the group (master only)."""
    return {"group_request": group_request_service.accept_request(db, group_id, request_id, current_user.id)}


@router.delete("/{group_id}/requests/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def reject_group_request(
    group_id: int,
    request_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Reject (delete) a pending request (master only)."""
    group_request_service.reject_request(db, group_id, request_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
