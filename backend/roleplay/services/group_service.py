"""Group service: group CRUD and roster management.

Only a group's master may update it, remove players from it or delete it.
The master can never be removed from the roster through ``remove_player``.
"""
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from roleplay import policies
from roleplay.exceptions import BadRequestError, ForbiddenError, NotFoundError
from roleplay.models.group import Group
from roleplay.repositories import groups as group_repository
from roleplay.repositories import users as user_repository

logger = logging.getLogger(__name__)


def _get_group(db: Session, group_id: int) -> Group:
    group = group_repository.find_by_id(db, group_id)
    if not group:
        raise NotFoundError("group not found")
    return group


def _check_master(group: Group, actor_id: int) -> None:
    if not policies.can_manage_group(actor_id, group):
        logger.warning("User %s is not master of group %s", actor_id, group.id)
        raise ForbiddenError("only the group master may modify this group")


def list_groups(db: Session, user_id: Optional[int] = None, text: Optional[str] = None) -> list[Group]:
    return group_repository.list_groups(db, user_id=user_id, text=text)


def create_group(db: Session, fields: dict[str, Any]) -> Group:
    """Create a group and put its master on the roster."""
    if not user_repository.find_by_id(db, fields["master"]):
        raise NotFoundError("master user not found")

    group = Group(**fields)
    group_repository.save(db, group)
    group_repository.attach_member(db, group.id, group.master)
    db.commit()
    db.refresh(group)
    logger.info("Created group '%s' (%s) mastered by user %s", group.name, group.id, group.master)
    return group


def update_group(db: Session, group_id: int, actor_id: int, updates: dict[str, Any]) -> Group:
    group = _get_group(db, group_id)
    _check_master(group, actor_id)

    new_master = updates.get("master")
    if new_master is not None and not user_repository.find_by_id(db, new_master):
        raise NotFoundError("master user not found")

    for field, value in updates.items():
        setattr(group, field, value)
    group_repository.save(db, group)
    db.commit()
    db.refresh(group)
    logger.info("Updated group %s", group_id)
    return group


def remove_player(db: Session, group_id: int, player_id: int, actor_id: int) -> None:
    """Detach a player from the roster. Removing a non-member is a no-op."""
    group = _get_group(db, group_id)
    _check_master(group, actor_id)
    if player_id == group.master:
        raise BadRequestError("Cannot remove master from group")

    removed = group_repository.detach_member(db, group_id, player_id)
    db.commit()
    logger.info("Removed user %s from group %s (%d row)", player_id, group_id, removed)


def delete_group(db: Session, group_id: int, actor_id: int) -> None:
    group = _get_group(db, group_id)
    _check_master(group, actor_id)

    group_repository.delete(db, group)
    db.commit()
    logger.info("Deleted group %s", group_id)
