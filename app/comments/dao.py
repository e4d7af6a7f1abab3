from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments.models import Comment
from app.dao.base import BaseDAO


class CommentDAO(BaseDAO):
    model = Comment

    @classmethod
    async def find_by_post(cls, session: AsyncSession, post_id: int) -> list[Comment]:
        q = select(Comment).where(Comment.post_id == post_id).order_by(Comment.created_at, Comment.id)
        res = await session.execute(q)
        return list(res.scalars().all())
