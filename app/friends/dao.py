from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, and_

from app.dao.base import BaseDAO
from app.friends.models import Friend, FriendStatus


class FriendDAO(BaseDAO):
    model = Friend

    @classmethod
    async def find_edge(cls, session: AsyncSession, user_id: int, friend_id: int) -> Optional[Friend]:
        """Ребро строго в направлении (user_id -> friend_id)."""
        return await cls.find_one_or_none(session, user_id=user_id, friend_id=friend_id)

    @classmethod
    async def exists(cls, session: AsyncSession, user_id: int, friend_id: int,
                     status: Optional[FriendStatus] = None) -> bool:
        """Есть ли ребро между пользователями в любую сторону."""
        query = select(Friend.id).where(
            or_(
                and_(Friend.user_id == user_id, Friend.friend_id == friend_id),
                and_(Friend.user_id == friend_id, Friend.friend_id == user_id),
            )
        )
        if status is not None:
            query = query.where(Friend.status == status)
        result = await session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    @classmethod
    async def find_by_status_and_user(cls, session: AsyncSession, status: FriendStatus, user_id: int) -> list[Friend]:
        return await cls.find_all(session, status=status, user_id=user_id)

    @classmethod
    async def find_by_status_and_friend(cls, session: AsyncSession, status: FriendStatus, friend_id: int) -> list[Friend]:
        return await cls.find_all(session, status=status, friend_id=friend_id)

    @classmethod
    async def find_connected_ids(cls, session: AsyncSession, user_id: int) -> set[int]:
        """id всех пользователей, с которыми у user_id есть хоть какое-то ребро."""
        result = await session.execute(
            select(Friend.user_id, Friend.friend_id).where(
                (Friend.user_id == user_id) | (Friend.friend_id == user_id)
            )
        )
        connected = set()
        for row in result.all():
            connected.add(row.friend_id if row.user_id == user_id else row.user_id)
        return connected
