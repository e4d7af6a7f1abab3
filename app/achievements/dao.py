from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.achievements.models import Achievement, UserAchievement
from app.dao.base import BaseDAO


class AchievementDAO(BaseDAO):
    model = Achievement

    @classmethod
    async def find_by_name(cls, session: AsyncSession, name: str) -> Optional[Achievement]:
        return await cls.find_one_or_none(session, name=name)


class UserAchievementDAO(BaseDAO):
    model = UserAchievement

    @classmethod
    async def find_by_user(cls, session: AsyncSession, user_id: int) -> list[UserAchievement]:
        q = select(UserAchievement).where(UserAchievement.user_id == user_id).order_by(UserAchievement.id)
        res = await session.execute(q)
        return list(res.scalars().all())
