from fastapi import APIRouter, status

from app.auth import services
from app.auth.schemas import LoginRequest, LoginResponse, PasswordReset, PasswordResetRequest, RegisterRequest
from app.database import SessionDep
from app.responses import ApiResponse

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=ApiResponse[LoginResponse], status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, session: SessionDep):
    login_response = await services.register(session, data)
    return ApiResponse(message="User registered successfully", data=login_response)


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(data: LoginRequest, session: SessionDep):
    login_response = await services.login(session, data)
    return ApiResponse(message="User logged in successfully", data=login_response)


@router.post("/password-reset/request", response_model=ApiResponse[None])
async def request_password_reset(data: PasswordResetRequest, session: SessionDep):
    """
    Выпускает токен сброса пароля.
    Доставка письма - внешняя система, сам токен в ответе не возвращается.
    """
    await services.create_password_reset_token(session, data.email)
    return ApiResponse(message="Password reset requested")


@router.post("/password-reset", response_model=ApiResponse[None])
async def reset_password(data: PasswordReset, session: SessionDep):
    await services.reset_password(session, data.token, data.new_password, data.confirm_password)
    return ApiResponse(message="Password was reset successfully")
