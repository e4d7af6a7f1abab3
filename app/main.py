import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from app import models  # noqa: F401  регистрация всех моделей в metadata
from app.achievements.router import router as achievements_router
from app.achievements.services import seed_achievements
from app.auth.router import router as auth_router
from app.comments.router import router as comments_router
from app.config import settings
from app.database import connection
from app.friends.router import router as friends_router
from app.groups.router import router as groups_router
from app.messages.router import router as messages_router
from app.notifications.router import router as notifications_router
from app.posts.router import router as posts_router
from app.responses import http_exception_handler, unhandled_exception_handler, validation_exception_handler
from app.statistics.router import router as statistics_router
from app.users.router import router as users_router

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


@connection()
async def _seed_catalogue(session: AsyncSession) -> None:
    await seed_achievements(session)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Приложение запускается...")
    await _seed_catalogue()
    yield
    logger.info("Приложение остановлено")


app = FastAPI(title="Buzz social network API", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(friends_router)
app.include_router(groups_router)
app.include_router(posts_router)
app.include_router(comments_router)
app.include_router(messages_router)
app.include_router(notifications_router)
app.include_router(statistics_router)
app.include_router(achievements_router)


# python -m uvicorn app.main:app --host 127.0.0.1 --port 8080 --reload
