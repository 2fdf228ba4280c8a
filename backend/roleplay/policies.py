"""Authorization rules, one predicate per protected operation."""
from roleplay.models.group import Group
from roleplay.models.group_request import GroupRequest
from roleplay.models.user import User


def can_update_group_request_status(actor_id: int, group_request: GroupRequest) -> bool:
    """Only the master of the request's own group may accept or reject it."""
    return group_request.group is not None and group_request.group.master == actor_id


def can_manage_group(actor_id: int, group: Group) -> bool:
    return group.master == actor_id


def can_update_user(actor_id: int, user: User) -> bool:
    return user.id == actor_id
