import math
from typing import Any, Generic, Optional, TypeVar

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Единый конверт ответа: {error, message, data}."""
    error: bool = False
    message: str
    data: Optional[T] = None


class Page(BaseModel, Generic[T]):
    content: list[T]
    number: int
    size: int
    total_elements: int
    total_pages: int
    last: bool

    @classmethod
    def build(cls, content: list, number: int, size: int, total_elements: int) -> "Page":
        total_pages = math.ceil(total_elements / size) if size else 0
        return cls(
            content=content,
            number=number,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages,
            last=number >= total_pages - 1,
        )


def generate_response(status_code: int, error: bool, message: str, data: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "data": data},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.detail}")
    return generate_response(exc.status_code, True, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {}
    for err in exc.errors():
        # loc: ("body", "field") / ("path", "id") -> "field" / "id"
        field = ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0])
        errors[field] = err["msg"]
    logger.warning(f"Validation failed on {request.method} {request.url.path}: {errors}")
    return generate_response(status.HTTP_400_BAD_REQUEST, True, "Validation failed", errors)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Internal server error on {request.method} {request.url.path}")
    # Текст исключения остаётся в логе, клиенту уходит только общее сообщение
    return generate_response(status.HTTP_500_INTERNAL_SERVER_ERROR, True, "Internal server error")
