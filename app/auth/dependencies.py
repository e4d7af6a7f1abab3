import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.config import settings
from app.database import SessionDep
from app.exception import (
    IncorrectFormatTokenException, NoTokenException, TokenExpireException, UserIsNotPresentException
)
from app.users.dao import UserDAO
from app.users.models import User

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "access_token"

bearer_scheme = HTTPBearer(auto_error=False)


def get_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Токен из заголовка Authorization: Bearer, иначе из куки."""
    if credentials and credentials.credentials:
        return credentials.credentials
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        raise NoTokenException
    return token


async def get_current_user(session: SessionDep, token: str = Depends(get_token)) -> User:
    """Получение текущего пользователя из JWT токена"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Expired token rejected")
        raise TokenExpireException
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise IncorrectFormatTokenException

    user_id = payload.get('sub')
    if not user_id:
        logger.warning("No user id in token")
        raise UserIsNotPresentException

    user = await UserDAO.find_one_or_none_by_id(session, int(user_id))
    if not user:
        logger.warning(f"User with id {user_id} not found")
        raise UserIsNotPresentException

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
