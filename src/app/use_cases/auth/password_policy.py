from typing import Optional

from src.libs.result import Error, Result, Return

MIN_PASSWORD_LENGTH = 6

# bcrypt only reads the first 72 bytes and bcrypt>=5 rejects anything longer
MAX_PASSWORD_BYTES = 72


def password_fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def validate_password(password: Optional[str]) -> Result[None]:
    """
    Validate a new password against the account password policy.

    Returns:
        Result with None if valid, or Error PASSWORD_REQUIRED /
        PASSWORD_TOO_SHORT / PASSWORD_TOO_LONG
    """
    if not password:
        return Return.err(Error("PASSWORD_REQUIRED", "Password is required"))

    if len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                "PASSWORD_TOO_SHORT",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            )
        )

    if not password_fits_bcrypt(password):
        return Return.err(
            Error(
                "PASSWORD_TOO_LONG",
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            )
        )

    return Return.ok(None)
