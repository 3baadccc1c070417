# core/mailer.py
from functools import lru_cache
from typing import List

from fastapi import HTTPException
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from core.config import settings
from core.logging_config import get_logger

logger = get_logger(__name__)


# ---------------- Email setup ----------------
@lru_cache
def get_mail_config() -> ConnectionConfig:
    return ConnectionConfig(
        MAIL_USERNAME=settings.MAIL_USERNAME,
        MAIL_PASSWORD=settings.MAIL_PASSWORD,
        MAIL_FROM=settings.MAIL_FROM,
        MAIL_FROM_NAME=settings.MAIL_FROM_NAME,
        MAIL_PORT=settings.MAIL_PORT,
        MAIL_SERVER=settings.MAIL_SERVER,
        MAIL_STARTTLS=settings.MAIL_STARTTLS,
        MAIL_SSL_TLS=settings.MAIL_SSL_TLS,
        USE_CREDENTIALS=bool(settings.MAIL_USERNAME),
    )


async def send_email(recipients: List[str], subject: str, html: str):
    message = MessageSchema(
        subject=subject,
        recipients=recipients,
        body=html,
        subtype=MessageType.html,
    )
    try:
        fm = FastMail(get_mail_config())
        await fm.send_message(message)
    except Exception:
        logger.exception("Failed to send '%s' email to %s", subject, recipients)
        raise HTTPException(status_code=500, detail="Failed to send email")
    logger.info("Sent '%s' email to %s", subject, recipients)
