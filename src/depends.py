from typing import Optional

from fastapi import Cookie, HTTPException, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.smtp_email_sender import SmtpEmailSender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import SESSION_COOKIE_NAME, verify_jwt
from src.app.services.email_sender import IEmailSender
from src.app.services.password_reset_settings import PasswordResetSettings

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_reset_settings() -> PasswordResetSettings:
    return PasswordResetSettings.from_config(ApplicationConfig)


def get_email_sender() -> IEmailSender:
    return SmtpEmailSender(
        host=ApplicationConfig.SMTP_HOST,
        port=ApplicationConfig.SMTP_PORT,
        username=ApplicationConfig.MAIL_USERNAME,
        password=ApplicationConfig.MAIL_PASSWORD,
        from_address=ApplicationConfig.MAIL_FROM,
        use_tls=ApplicationConfig.SMTP_USE_TLS,
        timeout_seconds=ApplicationConfig.EMAIL_SEND_TIMEOUT_SECONDS,
        token_ttl_minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES,
    )


async def get_current_user(
    token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE_NAME),
) -> dict:
    """
    Dependency to extract and verify the session JWT from its cookie.

    Args:
        token: Value of the session cookie

    Returns:
        Decoded JWT payload containing user_id

    Raises:
        HTTPException: 401 if the cookie is missing, invalid or expired
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - No Token Provided",
        )

    payload = verify_jwt(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload
