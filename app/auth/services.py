import uuid
from datetime import datetime, timedelta

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.auth import authenticate_user, create_access_token, get_password_hash
from app.auth.dao import VerificationTokenDAO
from app.auth.models import VerificationToken
from app.auth.schemas import LoginRequest, LoginResponse, RegisterRequest
from app.config import settings
from app.exception import (
    BadRequestException, IncorrectEmailOrPasswordException, NotFoundException, UserAlreadyExistsException
)
from app.users.dao import UserDAO
from app.users.models import Provider, User


def _login_response(user: User) -> LoginResponse:
    token = create_access_token({"sub": str(user.id)})
    return LoginResponse(user_id=user.id, email=user.email, token=token)


async def register(session: AsyncSession, data: RegisterRequest) -> LoginResponse:
    if await UserDAO.find_by_email(session, data.email):
        logger.info(f"User with email {data.email} can't be created. It already exists.")
        raise UserAlreadyExistsException

    user = User(
        email=data.email,
        password=get_password_hash(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        birthdate=data.birthdate,
        gender=data.gender,
        provider=Provider.LOCAL,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise UserAlreadyExistsException

    logger.info(f"User with email {user.email} registered successfully")
    return _login_response(user)


async def login(session: AsyncSession, data: LoginRequest) -> LoginResponse:
    user = await UserDAO.find_by_email(session, data.email)
    if user and user.provider == Provider.GOOGLE:
        logger.info(f"User with email {data.email} can't login. User registered via Google")
        raise IncorrectEmailOrPasswordException(
            f"User with email: {data.email} can't login. User registered via Google"
        )

    user = await authenticate_user(session, data.email, data.password)
    if not user:
        logger.info(f"Invalid credentials for {data.email}")
        raise IncorrectEmailOrPasswordException

    logger.info(f"User with email {user.email} logged in successfully")
    return _login_response(user)


async def create_password_reset_token(session: AsyncSession, email: str) -> str:
    """
    Создаёт одноразовый токен сброса пароля.
    Доставка письма - внешний сервис, здесь токен только выпускается.
    """
    user = await UserDAO.find_by_email(session, email)
    if not user:
        raise NotFoundException(f"User not found with email: {email}")

    token = VerificationToken(
        user_id=user.id,
        token=str(uuid.uuid4()),
        expired_at=datetime.utcnow() + timedelta(hours=settings.PASSWORD_RESET_TOKEN_HOURS),
    )
    session.add(token)
    await session.commit()

    logger.info(f"Password reset token issued for user {user.id}")
    return token.token


async def reset_password(session: AsyncSession, token: str, new_password: str, confirm_password: str) -> None:
    if new_password != confirm_password:
        raise BadRequestException("Passwords do not match")

    verification = await VerificationTokenDAO.find_by_token(session, token)
    if not verification:
        raise NotFoundException("Token not found")

    if verification.is_expired:
        await session.delete(verification)
        await session.commit()
        raise BadRequestException("Token expired")

    user = await UserDAO.find_one_or_none_by_id(session, verification.user_id)
    user.password = get_password_hash(new_password)
    await session.delete(verification)
    await session.commit()

    logger.info(f"Password for user {user.id} was reset")
