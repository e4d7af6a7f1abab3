from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.dao.base import BaseDAO
from app.groups.models import Group, GroupMember, GroupJoinRequest


class GroupDAO(BaseDAO):
    model = Group

    @classmethod
    async def find_page(cls, session: AsyncSession, page: int, size: int) -> tuple[list[Group], int]:
        total = await session.scalar(select(func.count(Group.id)))
        q = select(Group).order_by(Group.id).offset(page * size).limit(size)
        res = await session.execute(q)
        return list(res.scalars().all()), total or 0


class GroupMemberDAO(BaseDAO):
    model = GroupMember

    @classmethod
    async def find_member(cls, session: AsyncSession, group_id: int, user_id: int) -> Optional[GroupMember]:
        return await cls.find_one_or_none(session, group_id=group_id, user_id=user_id)

    @classmethod
    async def find_by_group(cls, session: AsyncSession, group_id: int) -> list[GroupMember]:
        q = select(GroupMember).where(GroupMember.group_id == group_id).order_by(GroupMember.id)
        res = await session.execute(q)
        return list(res.scalars().all())

    @classmethod
    async def find_group_ids_of_user(cls, session: AsyncSession, user_id: int) -> set[int]:
        res = await session.execute(select(GroupMember.group_id).where(GroupMember.user_id == user_id))
        return set(res.scalars().all())


class GroupJoinRequestDAO(BaseDAO):
    model = GroupJoinRequest

    @classmethod
    async def find_latest(cls, session: AsyncSession, group_id: int, user_id: int) -> Optional[GroupJoinRequest]:
        """Самая свежая заявка пользователя в группу."""
        q = (
            select(GroupJoinRequest)
            .where(GroupJoinRequest.group_id == group_id, GroupJoinRequest.user_id == user_id)
            .order_by(GroupJoinRequest.created_at.desc(), GroupJoinRequest.id.desc())
            .limit(1)
        )
        res = await session.execute(q)
        return res.scalar_one_or_none()

    @classmethod
    async def find_by_group(cls, session: AsyncSession, group_id: int) -> list[GroupJoinRequest]:
        q = select(GroupJoinRequest).where(GroupJoinRequest.group_id == group_id).order_by(GroupJoinRequest.id)
        res = await session.execute(q)
        return list(res.scalars().all())
