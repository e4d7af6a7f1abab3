from functools import wraps
from typing import Annotated

from fastapi import Depends
from sqlalchemy import Integer, text
from sqlalchemy.orm import Mapped, mapped_column, DeclarativeBase
from sqlalchemy.ext.asyncio import AsyncAttrs, async_sessionmaker, create_async_engine, AsyncSession

from app.config import database_url

engine = create_async_engine(url=database_url)
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def connection(isolation_level=None):
    """Открывает сессию для кода, работающего вне HTTP-запроса (скрипты, старт приложения)."""
    def decorator(method):
        @wraps(method)
        async def wrapper(*args, **kwargs):
            async with async_session_maker() as session:
                try:
                    if isolation_level:
                        await session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {isolation_level}"))

                    return await method(*args, session=session, **kwargs)
                except Exception:
                    await session.rollback()
                    raise
                finally:
                    await session.close()

        return wrapper

    return decorator


async def get_session() -> AsyncSession:
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            # Всё, что не закоммичено сервисом, откатывается целиком
            await session.rollback()
            raise
        finally:
            await session.close()


SessionDep: type[AsyncSession] = Annotated[AsyncSession, Depends(get_session)]


class Base(AsyncAttrs, DeclarativeBase):
    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
