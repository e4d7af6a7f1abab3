from typing import Optional

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.dao.base import BaseDAO
from app.users.models import User


class UserDAO(BaseDAO):
    model = User

    @classmethod
    async def find_by_email(cls, session: AsyncSession, email: str) -> Optional[User]:
        return await cls.find_one_or_none(session, email=email)

    @classmethod
    async def find_page_except(
        cls, session: AsyncSession, user_id: int, page: int, size: int
    ) -> tuple[list[User], int]:
        """Страница пользователей (кроме текущего) и общее количество."""
        total = await session.scalar(select(func.count(cls.model.id)).where(cls.model.id != user_id))
        q = (
            select(cls.model)
            .where(cls.model.id != user_id)
            .order_by(cls.model.id)
            .offset(page * size)
            .limit(size)
        )
        res = await session.execute(q)
        return list(res.scalars().all()), total or 0

    @classmethod
    async def find_newest_except(cls, session: AsyncSession, user_id: int, limit: int) -> list[User]:
        q = (
            select(cls.model)
            .where(cls.model.id != user_id)
            .order_by(cls.model.created_at.desc(), cls.model.id.desc())
            .limit(limit)
        )
        res = await session.execute(q)
        return list(res.scalars().all())

    @classmethod
    async def search_by_full_name(cls, session: AsyncSession, query: str) -> list[User]:
        pattern = f"%{query.strip().lower()}%"
        full_name = func.lower(cls.model.first_name + " " + cls.model.last_name)
        q = (
            select(cls.model)
            .where(or_(
                func.lower(cls.model.first_name).like(pattern),
                func.lower(cls.model.last_name).like(pattern),
                full_name.like(pattern),
            ))
            .order_by(cls.model.id)
        )
        res = await session.execute(q)
        return list(res.scalars().all())
