from typing import Optional

from fastapi import HTTPException, status


class AppException(HTTPException):  # <-- наследуемся от HTTPException,
    status_code = 500  # <-- задаем значения по умолчанию
    detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.detail)


class NotFoundException(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class BadRequestException(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Bad request"


class UserAlreadyExistsException(BadRequestException):
    detail = "Email already exists"


class NoPermissionsException(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Access denied"


class IncorrectEmailOrPasswordException(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid email or password"


class IncorrectFormatTokenException(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid token format"


class TokenExpireException(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Token expired"


class UserIsNotPresentException(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "User not found"


class NoTokenException(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Token is missing"
