"""User account service: registration and profile updates."""
import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roleplay import policies
from roleplay.exceptions import ConflictError, ForbiddenError, NotFoundError
from roleplay.models.user import User
from roleplay.repositories import users as user_repository
from roleplay.services.auth_service import hash_password

logger = logging.getLogger(__name__)


def create_user(db: Session, email: str, username: str, password: str, avatar: str | None = None) -> User:
    if user_repository.find_by_email(db, email):
        raise ConflictError("email already in use")
    if user_repository.find_by_username(db, username):
        raise ConflictError("username already in use")

    user = User(email=email, username=username, password_hash=hash_password(password), avatar=avatar)
    try:
        user_repository.save(db, user)
        db.commit()
    except IntegrityError:
        # Another registration took the email or username first.
        db.rollback()
        raise ConflictError("email or username already in use")
    db.refresh(user)
    logger.info("Created user %s (%s)", user.id, user.username)
    return user


def update_user(db: Session, user_id: int, actor_id: int, updates: dict[str, Any]) -> User:
    """Partially update a user's email, username, avatar or password."""
    user = user_repository.find_by_id(db, user_id)
    if not user:
        raise NotFoundError("user not found")
    if not policies.can_update_user(actor_id, user):
        raise ForbiddenError("cannot update another user")

    email = updates.get("email")
    if email and email != user.email:
        other = user_repository.find_by_email(db, email)
        if other and other.id != user.id:
            raise ConflictError("email already in use")
    username = updates.get("username")
    if username and username != user.username:
        other = user_repository.find_by_username(db, username)
        if other and other.id != user.id:
            raise ConflictError("username already in use")

    password = updates.pop("password", None)
    if password:
        user.password_hash = hash_password(password)
    for field, value in updates.items():
        setattr(user, field, value)

    user_repository.save(db, user)
    db.commit()
    db.refresh(user)
    logger.info("Updated user %s", user_id)
    return user
