from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession


class BaseDAO:
    model = None

    @classmethod
    async def find_all(cls, session: AsyncSession, **filter_by) -> list:
        query = select(cls.model).filter_by(**filter_by)
        result = await session.execute(query)
        return list(result.scalars().all())

    @classmethod
    async def find_one_or_none_by_id(cls, session: AsyncSession, model_id: int):
        query = select(cls.model).filter_by(id=model_id)
        result = await session.execute(query)
        return result.scalar_one_or_none()

    @classmethod
    async def find_one_or_none(cls, session: AsyncSession, **filter_by):
        query = select(cls.model).filter_by(**filter_by)
        result = await session.execute(query)
        return result.scalar_one_or_none()

    @classmethod
    async def count(cls, session: AsyncSession, **filter_by) -> int:
        query = select(func.count(cls.model.id)).filter_by(**filter_by)
        result = await session.execute(query)
        return result.scalar() or 0
