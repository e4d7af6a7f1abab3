from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments.models import Comment
from app.dao.base import BaseDAO
from app.posts.models import Post, PostImage, Like, Repost


class PostDAO(BaseDAO):
    model = Post

    @classmethod
    async def find_all_by_user(cls, session: AsyncSession, user_id: int) -> list[Post]:
        q = select(Post).where(Post.user_id == user_id).order_by(Post.created_at.desc(), Post.id.desc())
        res = await session.execute(q)
        return list(res.scalars().all())

    @classmethod
    async def find_by_group(cls, session: AsyncSession, group_id: int) -> list[Post]:
        q = select(Post).where(Post.group_id == group_id).order_by(Post.created_at.desc(), Post.id.desc())
        res = await session.execute(q)
        return list(res.scalars().all())

    @classmethod
    async def find_reposted_by_user(cls, session: AsyncSession, user_id: int) -> list[Post]:
        q = select(Post).join(Repost, Repost.post_id == Post.id).where(Repost.user_id == user_id)
        res = await session.execute(q)
        return list(res.scalars().all())

    @classmethod
    async def find_page_by_users(
        cls, session: AsyncSession, user_ids: list[int], page: int, size: int
    ) -> tuple[list[Post], int]:
        total = await session.scalar(select(func.count(Post.id)).where(Post.user_id.in_(user_ids)))
        q = (
            select(Post)
            .where(Post.user_id.in_(user_ids))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(page * size)
            .limit(size)
        )
        res = await session.execute(q)
        return list(res.scalars().all()), total or 0

    @classmethod
    async def count_with_images(cls, session: AsyncSession, user_id: int) -> int:
        q = (
            select(func.count(func.distinct(Post.id)))
            .join(PostImage, PostImage.post_id == Post.id)
            .where(Post.user_id == user_id)
        )
        return await session.scalar(q) or 0

    @classmethod
    async def counts(cls, session: AsyncSession, post_ids: list[int]) -> dict[int, dict[str, int]]:
        """Количество лайков / комментариев / репостов по каждому посту одним заходом."""
        counts = {post_id: {"likes": 0, "comments": 0, "reposts": 0} for post_id in post_ids}
        if not post_ids:
            return counts

        for key, model in (("likes", Like), ("comments", Comment), ("reposts", Repost)):
            q = (
                select(model.post_id, func.count(model.id))
                .where(model.post_id.in_(post_ids))
                .group_by(model.post_id)
            )
            res = await session.execute(q)
            for post_id, amount in res.all():
                counts[post_id][key] = amount
        return counts


class LikeDAO(BaseDAO):
    model = Like

    @classmethod
    async def find_by_user_and_post(cls, session: AsyncSession, user_id: int, post_id: int) -> Optional[Like]:
        return await cls.find_one_or_none(session, user_id=user_id, post_id=post_id)


class RepostDAO(BaseDAO):
    model = Repost

    @classmethod
    async def find_by_user_and_post(cls, session: AsyncSession, user_id: int, post_id: int) -> Optional[Repost]:
        return await cls.find_one_or_none(session, user_id=user_id, post_id=post_id)
