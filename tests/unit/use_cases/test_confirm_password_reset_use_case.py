"""
Unit tests for ConfirmPasswordResetUseCase

Tests all business logic with mocked dependencies.
"""
import asyncio
import hashlib
from datetime import datetime, timedelta
from typing import Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import bcrypt
import pytest

from src.app.use_cases.auth.confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from src.domain.entities import User

NOW = datetime(2026, 10, 18, 12, 0, 0)
SECRET = "ab" * 32
DIGEST = hashlib.sha256(SECRET.encode()).hexdigest()


def make_user(expiry: Optional[datetime] = NOW + timedelta(minutes=5)) -> User:
    return User(
        id=uuid4(),
        full_name="Alice Example",
        email="alice@example.com",
        password_hash=bcrypt.hashpw(b"oldpass1", bcrypt.gensalt(4)).decode(),
        reset_token_digest=DIGEST,
        reset_token_expiry=expiry,
    )


@pytest.mark.asyncio
async def test_successful_password_reset(mock_uow):
    user = make_user()
    mock_uow.users.get_by_valid_reset_token.return_value = user
    use_case = ConfirmPasswordResetUseCase(mock_uow, clock=lambda: NOW)

    result = await use_case.execute(SECRET, "newpass1")

    assert result.is_ok()
    assert result.value.message == "Password reset successful"

    # Lookup by digest, never by plaintext
    mock_uow.users.get_by_valid_reset_token.assert_called_once_with(DIGEST, NOW)

    mock_uow.users.complete_password_reset.assert_called_once()
    user_id, token_digest, now, password_hash = (
        mock_uow.users.complete_password_reset.call_args.args
    )
    assert user_id == user.id
    assert token_digest == DIGEST
    assert now == NOW
    assert bcrypt.checkpw(b"newpass1", password_hash.encode())
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "password, code",
    [
        (None, "PASSWORD_REQUIRED"),
        ("", "PASSWORD_REQUIRED"),
        ("12345", "PASSWORD_TOO_SHORT"),
        ("x" * 73, "PASSWORD_TOO_LONG"),
        ("é" * 37, "PASSWORD_TOO_LONG"),
    ],
)
async def test_password_policy_checked_before_store(mock_uow, password, code):
    use_case = ConfirmPasswordResetUseCase(mock_uow, clock=lambda: NOW)

    result = await use_case.execute(SECRET, password)

    assert result.is_err()
    assert result.error.code == code
    mock_uow.users.get_by_valid_reset_token.assert_not_called()
    mock_uow.users.complete_password_reset.assert_not_called()


@pytest.mark.asyncio
async def test_six_character_password_accepted(mock_uow):
    mock_uow.users.get_by_valid_reset_token.return_value = make_user()
    use_case = ConfirmPasswordResetUseCase(mock_uow, clock=lambda: NOW)

    result = await use_case.execute(SECRET, "123456")

    assert result.is_ok()


@pytest.mark.asyncio
async def test_72_byte_password_accepted(mock_uow):
    mock_uow.users.get_by_valid_reset_token.return_value = make_user()
    use_case = ConfirmPasswordResetUseCase(mock_uow, clock=lambda: NOW)

    result = await use_case.execute(SECRET, "x" * 72)

    assert result.is_ok()
    password_hash = mock_uow.users.complete_password_reset.call_args.args[3]
    assert bcrypt.checkpw(b"x" * 72, password_hash.encode())


@pytest.mark.asyncio
async def test_unknown_or_expired_token(mock_uow):
    mock_uow.users.get_by_valid_reset_token.return_value = None
    use_case = ConfirmPasswordResetUseCase(mock_uow, clock=lambda: NOW)

    result = await use_case.execute("not-a-real-token", "newpass1")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    assert result.error.message == "Invalid or expired reset token"
    mock_uow.users.complete_password_reset.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_token_consumed_between_lookup_and_update(mock_uow):
    mock_uow.users.get_by_valid_reset_token.return_value = make_user()
    mock_uow.users.complete_password_reset.return_value = False
    use_case = ConfirmPasswordResetUseCase(mock_uow, clock=lambda: NOW)

    result = await use_case.execute(SECRET, "newpass1")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    mock_uow.commit.assert_not_called()


class InMemoryUserRepository:
    """Single-record store with the same conditional-update contract as the SQL one"""

    def __init__(self, user: User):
        self.user = user
        self.lookups = 0
        self.both_looked_up = asyncio.Event()

    async def get_by_valid_reset_token(self, token_digest, now):
        self.lookups += 1
        if self.lookups == 2:
            self.both_looked_up.set()
        match = (
            self.user.reset_token_digest == token_digest
            and self.user.reset_token_expiry is not None
            and self.user.reset_token_expiry > now
        )
        # Hold every caller until both have seen the token as valid
        await self.both_looked_up.wait()
        return self.user if match else None

    async def complete_password_reset(self, user_id, token_digest, now, password_hash):
        if (
            self.user.id != user_id
            or self.user.reset_token_digest != token_digest
            or self.user.reset_token_expiry is None
            or not self.user.reset_token_expiry > now
        ):
            return False
        self.user.password_hash = password_hash
        self.user.reset_token_digest = None
        self.user.reset_token_expiry = None
        return True


def make_uow(repository):
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.users = repository
    return uow


@pytest.mark.asyncio
async def test_concurrent_completions_only_one_succeeds():
    user = make_user()
    repository = InMemoryUserRepository(user)

    first = ConfirmPasswordResetUseCase(make_uow(repository), clock=lambda: NOW)
    second = ConfirmPasswordResetUseCase(make_uow(repository), clock=lambda: NOW)

    results = await asyncio.gather(
        first.execute(SECRET, "newpass1"),
        second.execute(SECRET, "otherpass2"),
    )

    assert sorted(r.is_ok() for r in results) == [False, True]
    failed = next(r for r in results if r.is_err())
    assert failed.error.code == "INVALID_TOKEN"
    assert user.reset_token_digest is None
    assert user.reset_token_expiry is None


@pytest.mark.asyncio
async def test_expiry_boundary_is_strict():
    """expiry == now is expired, anything later is still valid"""
    at_now = InMemoryUserRepository(make_user(expiry=NOW))
    at_now.both_looked_up.set()
    result = await ConfirmPasswordResetUseCase(make_uow(at_now), clock=lambda: NOW).execute(
        SECRET, "newpass1"
    )
    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"

    just_after = InMemoryUserRepository(make_user(expiry=NOW + timedelta(microseconds=1)))
    just_after.both_looked_up.set()
    result = await ConfirmPasswordResetUseCase(
        make_uow(just_after), clock=lambda: NOW
    ).execute(SECRET, "newpass1")
    assert result.is_ok()
