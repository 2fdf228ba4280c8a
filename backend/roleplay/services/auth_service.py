"""Password hashing and API-token issuance / verification / revocation."""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from roleplay.config import settings
from roleplay.exceptions import BadRequestError, UnauthorizedError
from roleplay.models.user import User
from roleplay.repositories import tokens as token_repository
from roleplay.repositories import users as user_repository

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


def hash_password(raw: str) -> str:
    return pwd_ctx.hash(raw)


def verify_password(raw: str, hashed: str) -> bool:
    return pwd_ctx.verify(raw, hashed)


def create_session(db: Session, email: Optional[str], password: Optional[str]) -> tuple[User, str, datetime]:
    """Check credentials and issue a new API token.

    Every failure (missing field, unknown email, wrong password) is the same
    400 so the response does not reveal which accounts exist.
    """
    if not email or not password:
        raise BadRequestError("invalid credentials")
    user = user_repository.find_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Rejected sign-in for %s", email)
        raise BadRequestError("invalid credentials")

    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(minutes=settings.ACCESS_TOKEN_MINUTES)
    jti = uuid.uuid4().hex
    payload = {
        "sub": str(user.id),
        "jti": jti,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)
    token_repository.save_api_token(db, user.id, jti, expires_at)
    db.commit()
    logger.info("User %s signed in", user.id)
    return user, token, expires_at


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("token expired")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("invalid token")


def authenticate(db: Session, token: str) -> tuple[User, str]:
    """Resolve a bearer token to its user and token id, or raise 401."""
    claims = decode_token(token)
    jti = claims.get("jti")
    if not jti or token_repository.find_api_token(db, jti) is None:
        raise UnauthorizedError("token revoked")
    user = user_repository.find_by_id(db, int(claims["sub"]))
    if user is None:
        raise UnauthorizedError("user no longer exists")
    return user, jti


def revoke(db: Session, jti: str) -> None:
    token_repository.delete_api_token(db, jti)
    db.commit()
    logger.info("Revoked API token %s", jti)
