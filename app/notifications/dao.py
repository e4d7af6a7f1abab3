from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.dao.base import BaseDAO
from app.notifications.models import Notification


class NotificationDAO(BaseDAO):
    model = Notification

    @classmethod
    async def find_by_user(cls, session: AsyncSession, user_id: int, unread_only: bool = False) -> list[Notification]:
        q = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            q = q.where(Notification.is_read.is_(False))
        q = q.order_by(Notification.created_at.desc(), Notification.id.desc())
        res = await session.execute(q)
        return list(res.scalars().all())

    @classmethod
    async def mark_all_read(cls, session: AsyncSession, user_id: int) -> int:
        """Помечает все непрочитанные уведомления пользователя, возвращает их число."""
        unread = await cls.find_by_user(session, user_id, unread_only=True)
        for notification in unread:
            notification.is_read = True
        await session.commit()
        return len(unread)
