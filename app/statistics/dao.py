from datetime import datetime
from typing import Optional

from sqlalchemy import case, distinct, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments.models import Comment
from app.friends.models import Friend, FriendStatus
from app.posts.models import Like, Post


class StatisticDAO:
    """Счётчики активности пользователя. since=None - за всё время."""

    @staticmethod
    async def count_posts(session: AsyncSession, user_id: int, since: Optional[datetime] = None) -> int:
        q = select(func.count(Post.id)).where(Post.user_id == user_id)
        if since is not None:
            q = q.where(Post.created_at >= since)
        return await session.scalar(q) or 0

    @staticmethod
    async def count_given_comments(session: AsyncSession, user_id: int, since: Optional[datetime] = None) -> int:
        q = select(func.count(Comment.id)).where(Comment.user_id == user_id)
        if since is not None:
            q = q.where(Comment.created_at >= since)
        return await session.scalar(q) or 0

    @staticmethod
    async def count_given_likes(session: AsyncSession, user_id: int, since: Optional[datetime] = None) -> int:
        q = select(func.count(Like.id)).where(Like.user_id == user_id)
        if since is not None:
            q = q.where(Like.created_at >= since)
        return await session.scalar(q) or 0

    @staticmethod
    async def count_received_comments(session: AsyncSession, user_id: int, since: Optional[datetime] = None) -> int:
        # Окно применяется к постам автора, а не к самим комментариям
        q = select(func.count(Comment.id)).join(Post, Post.id == Comment.post_id).where(Post.user_id == user_id)
        if since is not None:
            q = q.where(Post.created_at >= since)
        return await session.scalar(q) or 0

    @staticmethod
    async def count_received_likes(session: AsyncSession, user_id: int, since: Optional[datetime] = None) -> int:
        q = select(func.count(Like.id)).join(Post, Post.id == Like.post_id).where(Post.user_id == user_id)
        if since is not None:
            q = q.where(Post.created_at >= since)
        return await session.scalar(q) or 0

    @staticmethod
    async def count_friends(session: AsyncSession, user_id: int, since: Optional[datetime] = None) -> int:
        # Считаем разных людей, а не рёбра
        other = case((Friend.user_id == user_id, Friend.friend_id), else_=Friend.user_id)
        q = select(func.count(distinct(other))).where(
            Friend.status == FriendStatus.ACCEPTED,
            or_(Friend.user_id == user_id, Friend.friend_id == user_id),
        )
        if since is not None:
            q = q.where(Friend.accepted_at >= since)
        return await session.scalar(q) or 0
