import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.password_reset_settings import PasswordResetSettings


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.create = AsyncMock()
    uow.users.set_reset_token = AsyncMock()
    uow.users.clear_reset_token = AsyncMock(return_value=True)
    uow.users.get_by_valid_reset_token = AsyncMock()
    uow.users.complete_password_reset = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def reset_settings():
    return PasswordResetSettings(
        frontend_url="https://chat.example.com",
        mail_username="mailer@example.com",
        mail_password="app-password",
    )
