"""User API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from roleplay.database import get_db
from roleplay.dependencies import get_current_user
from roleplay.models.user import User
from roleplay.schemas.user import UserCreate, UserUpdate, UserOut
from roleplay.services import user_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Register a new account."""
    return user_service.create_user(
        db,
        email=payload.email,
        username=payload.username,
        password=payload.password,
        avatar=payload.avatar,
    )


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    payload: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update your own email, username, avatar or password."""
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    return user_service.update_user(db, user_id=user_id, actor_id=current_user.id, updates=updates)
