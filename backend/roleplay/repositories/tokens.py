"""Persistence functions for API tokens and password-reset tokens."""
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.orm import Session

from roleplay.models.api_token import ApiToken
from roleplay.models.password_reset_token import PasswordResetToken


def save_api_token(db: Session, user_id: int, jti: str, expires_at: datetime) -> ApiToken:
    api_token = ApiToken(user_id=user_id, jti=jti, expires_at=expires_at)
    db.add(api_token)
    db.flush()
    return api_token


def find_api_token(db: Session, jti: str) -> Optional[ApiToken]:
    return db.query(ApiToken).filter(ApiToken.jti == jti).first()


def delete_api_token(db: Session, jti: str) -> int:
    return db.query(ApiToken).filter(ApiToken.jti == jti).delete(synchronize_session=False)


def find_reset_token(db: Session, token: str) -> Optional[PasswordResetToken]:
    return db.query(PasswordResetToken).filter(PasswordResetToken.token == token).first()


def upsert_reset_token(db: Session, user_id: int, token: str) -> PasswordResetToken:
    """Create the user's reset token, or replace the one they already have."""
    reset_token = (
        db.query(PasswordResetToken)
        .filter(PasswordResetToken.user_id == user_id)
        .first()
    )
    if reset_token is None:
        reset_token = PasswordResetToken(user_id=user_id)
        db.add(reset_token)
    reset_token.token = token
    reset_token.created_at = datetime.now(timezone.utc)
    db.flush()
    return reset_token


def delete_reset_token(db: Session, reset_token: PasswordResetToken) -> None:
    db.delete(reset_token)
    db.flush()
