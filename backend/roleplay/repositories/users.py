"""Persistence functions for users."""
from typing import Optional
from sqlalchemy.orm import Session

from roleplay.models.user import User


def find_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def find_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def save(db: Session, user: User) -> User:
    db.add(user)
    db.flush()
    return user
