"""
Скрипт для заполнения каталога достижений.
Запуск: python -m scripts.seed_achievements
"""
import asyncio

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app import models  # noqa: F401
from app.achievements.services import seed_achievements
from app.database import connection


@connection()
async def main(session: AsyncSession) -> None:
    added = await seed_achievements(session)
    logger.info(f"Каталог достижений готов, добавлено: {added}")


if __name__ == "__main__":
    asyncio.run(main())
