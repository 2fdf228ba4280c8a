"""Password-reset workflow: single-use tokens valid for a fixed window."""
import logging
import secrets
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from roleplay.config import settings
from roleplay.exceptions import NotFoundError, TokenExpiredError
from roleplay.repositories import tokens as token_repository
from roleplay.repositories import users as user_repository
from roleplay.services.auth_service import hash_password
from roleplay.services.mail_service import Mailer, MailMessage, render_template

logger = logging.getLogger(__name__)

PRODUCT_NAME = "Roleplay"
RESET_SUBJECT = "Roleplay: password recovery"


def _token_age_hours(created_at: datetime) -> float:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return (datetime.now(timezone.utc) - created_at).total_seconds() / 3600


async def forgot_password(db: Session, mailer: Mailer, email: str, reset_password_url: str) -> None:
    """Issue (or replace) the user's reset token and email them the link."""
    user = user_repository.find_by_email(db, email)
    if not user:
        raise NotFoundError("user not found")

    token = secrets.token_hex(settings.PASSWORD_RESET_TOKEN_BYTES)
    token_repository.upsert_reset_token(db, user.id, token)
    db.commit()
    logger.info("Issued password reset token for user %s", user.id)

    link = f"{reset_password_url}?token={token}"
    await mailer.send(MailMessage(
        to=user.email,
        subject=RESET_SUBJECT,
        text=f"Click the link below to recover your password:\n{link}",
        html=render_template(
            "emails/forgot_password.html",
            product_name=PRODUCT_NAME,
            username=user.username,
            reset_password_url=link,
            ttl_hours=settings.PASSWORD_RESET_TOKEN_TTL_HOURS,
        ),
    ))


def reset_password(db: Session, token: str, password: str) -> None:
    """Consume a reset token and set the new password."""
    reset_token = token_repository.find_reset_token(db, token)
    if not reset_token:
        raise NotFoundError("token not found")

    if _token_age_hours(reset_token.created_at) > settings.PASSWORD_RESET_TOKEN_TTL_HOURS:
        logger.warning("Expired reset token used for user %s", reset_token.user_id)
        token_repository.delete_reset_token(db, reset_token)
        db.commit()
        raise TokenExpiredError()

    user = user_repository.find_by_id(db, reset_token.user_id)
    user.password_hash = hash_password(password)
    user_repository.save(db, user)
    token_repository.delete_reset_token(db, reset_token)
    db.commit()
    logger.info("Password reset for user %s", user.id)
