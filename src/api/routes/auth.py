from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.jwt import SESSION_COOKIE_NAME
from src.app.services.email_sender import IEmailSender
from src.app.services.password_reset_settings import PasswordResetSettings
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    SignupCommand,
    SignupUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    AuthenticatedUser,
    MessageResponse,
    UserProfile,
)
from src.depends import (
    get_email_sender,
    get_password_reset_settings,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def set_session_cookie(response: Response, authenticated: AuthenticatedUser) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=authenticated.access_token,
        max_age=ApplicationConfig.JWT_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="strict",
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
    )


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Presence and length rules are enforced by the use case so that they
    surface as 400 errors with a specific code.
    """

    full_name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password (6 chars to 72 bytes)")


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=UserProfile)
async def signup(
    request: SignupRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Signup

    Creates a new account and starts a session (jwt cookie).

    Raises:
        - 400 Bad Request: Missing fields, password too short or too long, or email already exists
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(
        full_name=request.full_name, email=request.email, password=request.password
    )

    use_case = SignupUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in (
            "MISSING_FIELDS",
            "PASSWORD_REQUIRED",
            "PASSWORD_TOO_SHORT",
            "PASSWORD_TOO_LONG",
            "EMAIL_ALREADY_EXISTS",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    set_session_cookie(response, result.value)
    return result.value.user


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=UserProfile)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Login

    Raises:
        - 400 Bad Request: Invalid credentials
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    set_session_cookie(response, result.value)
    return result.value.user


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(response: Response):
    """User Logout - clears the session cookie"""
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        samesite="strict",
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
    )
    return MessageResponse(message="Logged out successfully")


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: Optional[str] = Field(None, description="Email of the account to reset")


@router.post("/forgot-password", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    settings: PasswordResetSettings = Depends(get_password_reset_settings),
):
    """
    Request Password Reset

    Stores a fresh reset token digest (10 minute expiry) and emails a link
    containing the plaintext secret to the account's address.

    Note:
        Unknown emails return 404 unless RESET_CONCEAL_UNKNOWN_EMAIL is set,
        which reveals whether an account exists.

    Raises:
        - 400 Bad Request: Email missing
        - 404 Not Found: No account with this email
        - 500 Internal Server Error: Mail not configured or delivery failed
    """
    use_case = RequestPasswordResetUseCase(uow, email_sender, settings)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_REQUIRED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    password: Optional[str] = Field(None, description="New password (6 chars to 72 bytes)")


@router.post("/reset-password/{token}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Confirm Password Reset

    Validates the emailed secret and replaces the password. The token is
    single-use: it is cleared in the same update that changes the password.

    Raises:
        - 400 Bad Request: Password missing, too short or too long, or invalid/expired/used token
        - 500 Internal Server Error: Server error
    """
    use_case = ConfirmPasswordResetUseCase(uow)
    result = await use_case.execute(token, request.password)

    if result.is_err():
        error = result.error
        if error.code in (
            "PASSWORD_REQUIRED",
            "PASSWORD_TOO_SHORT",
            "PASSWORD_TOO_LONG",
            "INVALID_TOKEN",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
