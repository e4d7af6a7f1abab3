from datetime import datetime, timedelta
from typing import Optional

from jose import jwt
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.users.dao import UserDAO
from app.users.models import User

pwd_context = CryptContext(schemes=['bcrypt'], deprecated="auto")

BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> str:
    # bcrypt учитывает только первые 72 байта
    if len(password.encode('utf-8')) > BCRYPT_MAX_BYTES:
        password = password.encode('utf-8')[:BCRYPT_MAX_BYTES].decode('utf-8', errors='ignore')
    return password


def get_password_hash(password: str) -> str:
    return pwd_context.hash(_truncate(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(_truncate(plain_password), hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Создание JWT токена"""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({'exp': expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, settings.ALGORITHM)


async def authenticate_user(session: AsyncSession, email: str, password: str) -> Optional[User]:
    user = await UserDAO.find_by_email(session, email)
    if not user or not user.password or not verify_password(password, user.password):
        return None
    return user
