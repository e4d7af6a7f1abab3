"""
Тесты регистрации, входа и сброса пароля.
"""
from datetime import date, datetime, timedelta

import pytest
from jose import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import services
from app.auth.auth import create_access_token, get_password_hash, verify_password
from app.auth.models import VerificationToken
from app.auth.schemas import LoginRequest, RegisterRequest
from app.config import settings
from app.exception import (
    BadRequestException, IncorrectEmailOrPasswordException, NotFoundException, UserAlreadyExistsException
)
from app.users.models import Provider, User


def _register_request(email: str = "dave@example.com") -> RegisterRequest:
    return RegisterRequest(
        email=email,
        password="secret-pass",
        first_name="Dave",
        last_name="Tester",
        birthdate=date(1990, 1, 1),
        gender="male",
    )


def test_password_hash_roundtrip():
    hashed = get_password_hash("secret-pass")

    assert hashed != "secret-pass"
    assert verify_password("secret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)


def test_long_password_uses_first_72_bytes():
    hashed = get_password_hash("a" * 100)
    assert verify_password("a" * 72, hashed)


def test_access_token_contains_subject():
    token = create_access_token({"sub": "42"})
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])

    assert payload["sub"] == "42"
    assert payload["exp"] > datetime.utcnow().timestamp()


@pytest.mark.asyncio
async def test_register_returns_token(fake_session: AsyncSession):
    response = await services.register(fake_session, _register_request())

    user = await fake_session.get(User, response.user_id)
    assert user.email == "dave@example.com"
    assert user.provider == Provider.LOCAL
    assert verify_password("secret-pass", user.password)
    payload = jwt.decode(response.token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert payload["sub"] == str(user.id)


@pytest.mark.asyncio
async def test_register_duplicate_email(fake_session: AsyncSession, test_users):
    with pytest.raises(UserAlreadyExistsException):
        await services.register(fake_session, _register_request("alice@example.com"))


@pytest.mark.asyncio
async def test_login(fake_session: AsyncSession, test_users):
    alice, _, _ = test_users

    response = await services.login(fake_session, LoginRequest(email="alice@example.com", password="password123"))
    assert response.user_id == alice.id

    with pytest.raises(IncorrectEmailOrPasswordException):
        await services.login(fake_session, LoginRequest(email="alice@example.com", password="wrong-password"))
    with pytest.raises(IncorrectEmailOrPasswordException):
        await services.login(fake_session, LoginRequest(email="nobody@example.com", password="password123"))


@pytest.mark.asyncio
async def test_google_user_cannot_login_with_password(fake_session: AsyncSession, make_user):
    await make_user("gina", provider=Provider.GOOGLE)

    with pytest.raises(IncorrectEmailOrPasswordException, match="Google"):
        await services.login(fake_session, LoginRequest(email="gina@example.com", password="password123"))


@pytest.mark.asyncio
async def test_password_reset_flow(fake_session: AsyncSession, test_users):
    alice, _, _ = test_users

    token = await services.create_password_reset_token(fake_session, "alice@example.com")
    await services.reset_password(fake_session, token, "brand-new-pass", "brand-new-pass")

    assert verify_password("brand-new-pass", alice.password)
    assert await fake_session.scalar(select(VerificationToken)) is None
    # Токен одноразовый
    with pytest.raises(NotFoundException):
        await services.reset_password(fake_session, token, "another-pass", "another-pass")


@pytest.mark.asyncio
async def test_password_reset_for_unknown_email(fake_session: AsyncSession, test_users):
    with pytest.raises(NotFoundException):
        await services.create_password_reset_token(fake_session, "nobody@example.com")


@pytest.mark.asyncio
async def test_password_reset_with_expired_token(fake_session: AsyncSession, test_users):
    alice, _, _ = test_users
    fake_session.add(VerificationToken(
        user_id=alice.id, token="expired-token", expired_at=datetime.utcnow() - timedelta(minutes=1)
    ))
    await fake_session.commit()

    with pytest.raises(BadRequestException, match="Token expired"):
        await services.reset_password(fake_session, "expired-token", "brand-new-pass", "brand-new-pass")
    assert await fake_session.scalar(select(VerificationToken)) is None


@pytest.mark.asyncio
async def test_password_reset_mismatch(fake_session: AsyncSession, test_users):
    token = await services.create_password_reset_token(fake_session, "alice@example.com")

    with pytest.raises(BadRequestException, match="Passwords do not match"):
        await services.reset_password(fake_session, token, "brand-new-pass", "other-new-pass")
