"""Session (sign-in / sign-out) API routes."""
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from roleplay.database import get_db
from roleplay.dependencies import get_current_session
from roleplay.schemas.session import SessionCreate, SessionOut, TokenOut
from roleplay.schemas.user import UserOut
from roleplay.services import auth_service

router = APIRouter()


@router.post("", response_model=SessionOut, status_code=status.HTTP_201_CREATED)
def create_session(payload: Optional[SessionCreate] = None, db: Session = Depends(get_db)):
    """Exchange email and password for an API token."""
    payload = payload or SessionCreate()
    user, token, expires_at = auth_service.create_session(db, payload.email, payload.password)
    return SessionOut(
        user=UserOut.model_validate(user),
        token=TokenOut(token=token, expires_at=expires_at),
    )


@router.delete("", status_code=status.HTTP_200_OK)
def delete_session(current=Depends(get_current_session), db: Session = Depends(get_db)):
    """Revoke the token used for this request."""
    _, jti = current
    auth_service.revoke(db, jti)
    return {}
