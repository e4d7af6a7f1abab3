from sqlalchemy import select, func, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.dao.base import BaseDAO
from app.messages.models import Message


class MessageDAO(BaseDAO):
    model = Message

    @classmethod
    async def find_dialog_page(
        cls, session: AsyncSession, user_id: int, friend_id: int, page: int, size: int
    ) -> tuple[list[Message], int]:
        """Переписка двух пользователей в обе стороны, новые сверху."""
        condition = or_(
            and_(Message.sender_id == user_id, Message.receiver_id == friend_id),
            and_(Message.sender_id == friend_id, Message.receiver_id == user_id),
        )
        total = await session.scalar(select(func.count(Message.id)).where(condition))
        q = (
            select(Message)
            .where(condition)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .offset(page * size)
            .limit(size)
        )
        res = await session.execute(q)
        return list(res.scalars().all()), total or 0
