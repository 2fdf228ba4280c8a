"""Group-request workflow: users ask to join a group, its master decides.

Lifecycle: a request is created PENDING by the requesting user. The group's
master either accepts it, which marks it ACCEPTED and puts the user on the
roster in one transaction, or rejects it, which deletes it. Both outcomes
are terminal.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roleplay import policies
from roleplay.database import transaction
from roleplay.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnprocessableEntityError,
)
from roleplay.models.group_request import GroupRequest, GroupRequestStatus
from roleplay.repositories import group_requests as request_repository
from roleplay.repositories import groups as group_repository

logger = logging.getLogger(__name__)


def _check_authorization(group_request: GroupRequest, actor_id: int) -> None:
    if not policies.can_update_group_request_status(actor_id, group_request):
        logger.warning("User %s may not decide group request %s", actor_id, group_request.id)
        raise ForbiddenError("only the group master may accept or reject requests")


def _check_pending(group_request: GroupRequest) -> None:
    if group_request.status != GroupRequestStatus.pending:
        raise BadRequestError(f"group request is already {group_request.status.value}")


def list_pending_for_master(db: Session, master_id: int) -> list[GroupRequest]:
    return request_repository.list_pending_for_master(db, master_id)


def create_request(db: Session, group_id: int, user_id: int) -> GroupRequest:
    if not group_repository.find_by_id(db, group_id):
        raise NotFoundError("group not found")
    if request_repository.find_for_user(db, group_id, user_id):
        raise ConflictError("group request already exists")
    if group_repository.is_member(db, group_id, user_id):
        raise UnprocessableEntityError("user is already in the group")

    group_request = GroupRequest(group_id=group_id, user_id=user_id, status=GroupRequestStatus.pending)
    try:
        request_repository.save(db, group_request)
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent request for the same pair.
        db.rollback()
        raise ConflictError("group request already exists")
    db.refresh(group_request)
    logger.info("GroupRequest %s created for group %s by user %s", group_request.id, group_id, user_id)
    return group_request


def accept_request(db: Session, group_id: int, request_id: int, actor_id: int) -> GroupRequest:
    """Mark a request ACCEPTED and add its user to the roster, atomically."""
    with transaction(db):
        group_request = request_repository.find_by_id(db, request_id)
        if not group_request:
            raise NotFoundError("group request not found")
        group = group_repository.find_by_id(db, group_id)
        if not group:
            raise NotFoundError("group not found")
        if group_request.group_id != group.id:
            raise NotFoundError("group request not found")
        _check_authorization(group_request, actor_id)
        _check_pending(group_request)

        group_request.status = GroupRequestStatus.accepted
        request_repository.save(db, group_request)
        group_repository.attach_member(db, group_request.group_id, group_request.user_id)

    db.refresh(group_request)
    logger.info("GroupRequest %s accepted by user %s", request_id, actor_id)
    return group_request


def reject_request(db: Session, group_id: int, request_id: int, actor_id: int) -> None:
    group_request = request_repository.find_in_group(db, request_id, group_id)
    if not group_request:
        raise NotFoundError("group request not found")
    _check_authorization(group_request, actor_id)
    _check_pending(group_request)

    request_repository.delete(db, group_request)
    db.commit()
    logger.info("GroupRequest %s rejected by user %s", request_id, actor_id)
