from datetime import timedelta
from typing import List, Optional

from pydantic import BaseModel


class PasswordResetSettings(BaseModel):
    """Settings the forgot-password flow needs, injected at construction"""

    frontend_url: Optional[str] = None
    mail_username: Optional[str] = None
    mail_password: Optional[str] = None
    token_ttl_minutes: int = 10
    conceal_unknown_email: bool = False

    @classmethod
    def from_config(cls, config) -> "PasswordResetSettings":
        return cls(
            frontend_url=config.FRONTEND_URL,
            mail_username=config.MAIL_USERNAME,
            mail_password=config.MAIL_PASSWORD,
            token_ttl_minutes=config.RESET_TOKEN_TTL_MINUTES,
            conceal_unknown_email=config.RESET_CONCEAL_UNKNOWN_EMAIL,
        )

    def missing_fields(self) -> List[str]:
        """Names of required settings that are unset or blank"""
        required = {
            "FRONTEND_URL": self.frontend_url,
            "MAIL_USERNAME": self.mail_username,
            "MAIL_PASSWORD": self.mail_password,
        }
        return [name for name, value in required.items() if not value]

    @property
    def is_configured(self) -> bool:
        return not self.missing_fields()

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(minutes=self.token_ttl_minutes)

    def build_reset_url(self, secret: str) -> str:
        return f"{self.frontend_url.rstrip('/')}/reset-password/{secret}"
