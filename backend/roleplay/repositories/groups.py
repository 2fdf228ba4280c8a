"""Persistence functions for groups and their rosters."""
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from roleplay.models.group import Group, GroupPlayer


def find_by_id(db: Session, group_id: int) -> Optional[Group]:
    return db.query(Group).filter(Group.id == group_id).first()


def list_groups(db: Session, user_id: Optional[int] = None, text: Optional[str] = None) -> list[Group]:
    """List groups with roster and master preloaded, optionally filtered."""
    query = db.query(Group).options(selectinload(Group.players), selectinload(Group.master_user))
    if user_id is not None:
        query = query.filter(Group.memberships.any(GroupPlayer.user_id == user_id))
    if text:
        pattern = f"%{text}%"
        query = query.filter(or_(Group.name.ilike(pattern), Group.description.ilike(pattern)))
    return query.order_by(Group.id).all()


def save(db: Session, group: Group) -> Group:
    db.add(group)
    db.flush()
    return group


def delete(db: Session, group: Group) -> None:
    """Delete a group; its roster rows go with it."""
    db.delete(group)
    db.flush()


def is_member(db: Session, group_id: int, user_id: int) -> bool:
    return (
        db.query(GroupPlayer)
        .filter(GroupPlayer.group_id == group_id, GroupPlayer.user_id == user_id)
        .first()
        is not None
    )


def attach_member(db: Session, group_id: int, user_id: int) -> None:
    """Add a user to a group's roster. Already-attached users are left alone."""
    if is_member(db, group_id, user_id):
        return
    db.add(GroupPlayer(group_id=group_id, user_id=user_id))
    db.flush()


def detach_member(db: Session, group_id: int, user_id: int) -> int:
    """Remove a user from a roster; returns the number of rows removed (0 or 1)."""
    removed = (
        db.query(GroupPlayer)
        .filter(GroupPlayer.group_id == group_id, GroupPlayer.user_id == user_id)
        .delete(synchronize_session=False)
    )
    db.flush()
    return removed
