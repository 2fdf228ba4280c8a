"""Request-scoped dependencies: current user and mailer."""
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from roleplay.database import get_db
from roleplay.exceptions import UnauthorizedError
from roleplay.models.user import User
from roleplay.services import auth_service
from roleplay.services.mail_service import Mailer, SmtpMailer

security = HTTPBearer(auto_error=False)


def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    db: Session = Depends(get_db),
) -> tuple[User, str]:
    """Return the authenticated user and the id of the token they presented."""
    if credentials is None:
        raise UnauthorizedError("missing bearer token")
    return auth_service.authenticate(db, credentials.credentials)


def get_current_user(current: tuple[User, str] = Depends(get_current_session)) -> User:
    return current[0]


def get_mailer() -> Mailer:
    return SmtpMailer()
