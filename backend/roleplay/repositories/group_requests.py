"""Persistence functions for group join requests."""
from typing import Optional
from sqlalchemy.orm import Session, contains_eager, joinedload

from roleplay.models.group import Group
from roleplay.models.group_request import GroupRequest, GroupRequestStatus


def find_by_id(db: Session, request_id: int) -> Optional[GroupRequest]:
    return db.query(GroupRequest).filter(GroupRequest.id == request_id).first()


def find_in_group(db: Session, request_id: int, group_id: int) -> Optional[GroupRequest]:
    return (
        db.query(GroupRequest)
        .filter(GroupRequest.id == request_id, GroupRequest.group_id == group_id)
        .first()
    )


def find_for_user(db: Session, group_id: int, user_id: int) -> Optional[GroupRequest]:
    """Any request, whatever its status, for the (group, user) pair."""
    return (
        db.query(GroupRequest)
        .filter(GroupRequest.group_id == group_id, GroupRequest.user_id == user_id)
        .first()
    )


def list_pending_for_master(db: Session, master_id: int) -> list[GroupRequest]:
    """Pending requests on every group mastered by ``master_id``, with group and user loaded."""
    return (
        db.query(GroupRequest)
        .join(GroupRequest.group)
        .options(contains_eager(GroupRequest.group), joinedload(GroupRequest.user))
        .filter(Group.master == master_id, GroupRequest.status == GroupRequestStatus.pending)
        .order_by(GroupRequest.id)
        .all()
    )


def save(db: Session, group_request: GroupRequest) -> GroupRequest:
    db.add(group_request)
    db.flush()
    return group_request


def delete(db: Session, group_request: GroupRequest) -> None:
    db.delete(group_request)
    db.flush()
