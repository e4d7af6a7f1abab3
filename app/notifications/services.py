from typing import Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.exception import NoPermissionsException, NotFoundException
from app.notifications.dao import NotificationDAO
from app.notifications.models import Notification, NotificationType


def notify(
    session: AsyncSession, recipient_id: int, sender_id: int, post_id: int, type_: NotificationType
) -> Optional[Notification]:
    """
    Добавляет уведомление в текущую транзакцию, коммитит вызывающий сервис.
    Действия над своими постами уведомлений не создают.
    """
    if recipient_id == sender_id:
        return None
    notification = Notification(user_id=recipient_id, sender_id=sender_id, post_id=post_id, type=type_)
    session.add(notification)
    return notification


async def get_notifications(session: AsyncSession, user_id: int, unread_only: bool = False) -> list[Notification]:
    return await NotificationDAO.find_by_user(session, user_id, unread_only)


async def mark_as_read(session: AsyncSession, notification_id: int, user_id: int) -> Notification:
    notification = await NotificationDAO.find_one_or_none_by_id(session, notification_id)
    if not notification:
        raise NotFoundException(f"Notification not found with id: {notification_id}")
    if notification.user_id != user_id:
        raise NoPermissionsException("User does not have permission to read this notification")

    notification.is_read = True
    await session.commit()
    return notification


async def mark_all_as_read(session: AsyncSession, user_id: int) -> int:
    updated = await NotificationDAO.mark_all_read(session, user_id)
    logger.info(f"User {user_id} marked {updated} notifications as read")
    return updated
