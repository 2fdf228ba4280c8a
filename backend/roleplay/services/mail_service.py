"""Outbound email: message rendering and SMTP delivery through fastapi-mail."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType, MultipartSubtypeEnum
from fastapi_mail.errors import ConnectionErrors
from jinja2 import Environment, FileSystemLoader, select_autoescape

from roleplay.config import settings
from roleplay.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=select_autoescape(["html"]))


def render_template(template_name: str, **context) -> str:
    return _env.get_template(template_name).render(**context)


@dataclass
class MailMessage:
    to: str
    subject: str
    text: str
    html: str


class Mailer(ABC):
    """Anything that can deliver a ``MailMessage``."""

    @abstractmethod
    async def send(self, message: MailMessage) -> None:
        ...


def build_connection_config(**overrides) -> ConnectionConfig:
    """Connection settings for fastapi-mail, taken from the app settings."""
    values = dict(
        MAIL_SERVER=settings.MAIL_HOST,
        MAIL_PORT=settings.MAIL_PORT,
        MAIL_USERNAME=settings.MAIL_USERNAME,
        MAIL_PASSWORD=settings.MAIL_PASSWORD,
        MAIL_FROM=settings.MAIL_DEFAULT_SENDER,
        MAIL_STARTTLS=settings.MAIL_USE_TLS,
        MAIL_SSL_TLS=False,
        USE_CREDENTIALS=bool(settings.MAIL_USERNAME),
        TEMPLATE_FOLDER=TEMPLATES_DIR,
    )
    values.update(overrides)
    return ConnectionConfig(**values)


class SmtpMailer(Mailer):
    def __init__(self, config: Optional[ConnectionConfig] = None):
        self.fast_mail = FastMail(config or build_connection_config())

    async def send(self, message: MailMessage) -> None:
        """Deliver a message as HTML with a plain-text alternative.

        Raises:
            MailDeliveryError: If the SMTP server cannot be reached or refuses the message.
        """
        schema = MessageSchema(
            subject=message.subject,
            recipients=[message.to],
            body=message.html,
            alternative_body=message.text,
            subtype=MessageType.html,
            multipart_subtype=MultipartSubtypeEnum.alternative,
        )
        try:
            await self.fast_mail.send_message(schema)
        except ConnectionErrors as e:
            raise MailDeliveryError(f"Failed to send email: {e}") from e
        logger.info("Sent '%s' to %s", message.subject, message.to)
