from datetime import datetime, time, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.exception import BadRequestException
from app.statistics.dao import StatisticDAO
from app.users.services import get_user_or_404

POSTS = "amount of posts"
GIVEN_COMMENTS = "amount of given comments"
GIVEN_LIKES = "amount of given likes"
RECEIVED_COMMENTS = "amount of received comments"
RECEIVED_LIKES = "amount of received likes"
FRIENDS = "amount of friends"


def window_start(days: int, now: Optional[datetime] = None) -> datetime:
    """
    Начало окна из N календарных дней, включая сегодняшний:
    запись попадает в окно, если (сегодня - дата записи).days < N.
    """
    today = (now or datetime.utcnow()).date()
    return datetime.combine(today - timedelta(days=days - 1), time.min)


async def _collect(session: AsyncSession, user_id: int, since: Optional[datetime]) -> dict[str, int]:
    # Новый словарь на каждый вызов
    return {
        POSTS: await StatisticDAO.count_posts(session, user_id, since),
        GIVEN_COMMENTS: await StatisticDAO.count_given_comments(session, user_id, since),
        GIVEN_LIKES: await StatisticDAO.count_given_likes(session, user_id, since),
        RECEIVED_COMMENTS: await StatisticDAO.count_received_comments(session, user_id, since),
        RECEIVED_LIKES: await StatisticDAO.count_received_likes(session, user_id, since),
        FRIENDS: await StatisticDAO.count_friends(session, user_id, since),
    }


async def get_all_time_statistic(session: AsyncSession, user_id: int) -> dict[str, int]:
    await get_user_or_404(session, user_id)
    return await _collect(session, user_id, None)


async def get_statistic_for_last_days(session: AsyncSession, user_id: int, days: int) -> dict[str, int]:
    if days < 1:
        raise BadRequestException("Days must be a positive number")
    await get_user_or_404(session, user_id)
    return await _collect(session, user_id, window_start(days))
