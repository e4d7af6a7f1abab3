from typing import Union

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.achievements.dao import AchievementDAO, UserAchievementDAO
from app.achievements.models import Achievement, Achievements, PREMIUM_ACHIEVEMENTS, UserAchievement
from app.exception import BadRequestException


async def seed_achievements(session: AsyncSession) -> int:
    """Добавляет в каталог недостающие достижения, возвращает число добавленных."""
    existing = set((await session.execute(select(Achievement.name))).scalars().all())
    added = 0
    for item in Achievements:
        if item.value in existing:
            continue
        session.add(Achievement(
            name=item.value,
            description=f"Achievement \"{item.value}\"",
            is_premium=item in PREMIUM_ACHIEVEMENTS,
        ))
        added += 1
    if added:
        await session.commit()
        logger.info(f"Seeded {added} achievements")
    return added


async def award_achievement(session: AsyncSession, user_id: int, achievement_name: Union[str, Achievements]) -> bool:
    """Выдаёт достижение. Повторная выдача ничего не делает. True - если выдано сейчас."""
    name = str(achievement_name)
    achievement = await AchievementDAO.find_by_name(session, name)
    if not achievement:
        raise BadRequestException(f"Unknown achievement name: {name}")

    if await UserAchievementDAO.find_one_or_none(session, user_id=user_id, achievement_id=achievement.id):
        return False

    session.add(UserAchievement(user_id=user_id, achievement_id=achievement.id))
    await session.commit()
    logger.info(f"User {user_id} awarded achievement {name!r}")
    return True


async def get_all_achievements_of_user(session: AsyncSession, user_id: int) -> list[Achievement]:
    return [ua.achievement for ua in await UserAchievementDAO.find_by_user(session, user_id)]


async def user_have_achievement(session: AsyncSession, user_id: int, achievement_name: Union[str, Achievements]) -> bool:
    name = str(achievement_name)
    return any(a.name == name for a in await get_all_achievements_of_user(session, user_id))
