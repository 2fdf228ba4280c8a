"""Forgot / reset password API routes."""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from roleplay.database import get_db
from roleplay.dependencies import get_mailer
from roleplay.schemas.password import ForgotPasswordIn, ResetPasswordIn
from roleplay.services import password_service
from roleplay.services.mail_service import Mailer

router = APIRouter()


@router.post("/forgot-password", status_code=status.HTTP_204_NO_CONTENT)
async def forgot_password(
    payload: ForgotPasswordIn,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """Email a password reset link to the account owner."""
    await password_service.forgot_password(db, mailer, payload.email, payload.reset_password_url)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/reset-password", status_code=status.HTTP_204_NO_CONTENT)
def reset_password(payload: ResetPasswordIn, db: Session = Depends(get_db)):
    """Set a new password using a token from the reset email."""
    password_service.reset_password(db, payload.token, payload.password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
