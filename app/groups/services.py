from typing import Optional, Union

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exception import BadRequestException, NoPermissionsException, NotFoundException
from app.groups.dao import GroupDAO, GroupJoinRequestDAO, GroupMemberDAO
from app.groups.models import Group, GroupJoinRequest, GroupJoinStatus, GroupMember, GroupRole
from app.groups.schemas import GroupCreate, GroupOut, GroupUpdate
from app.responses import Page
from app.users.dao import UserDAO
from app.users.models import User

INVALID_RESPOND_STATUS = "Invalid status for group member request. Status must be APPROVED or REJECTED"


def to_group_out(group: Group, is_member: bool = False) -> GroupOut:
    out = GroupOut.model_validate(group)
    out.is_member = is_member
    return out


def parse_respond_status(status: Union[str, GroupJoinStatus]) -> GroupJoinStatus:
    try:
        parsed = GroupJoinStatus(status.upper() if isinstance(status, str) else status)
    except ValueError:
        raise BadRequestException(INVALID_RESPOND_STATUS)
    if parsed == GroupJoinStatus.PENDING:
        raise BadRequestException(INVALID_RESPOND_STATUS)
    return parsed


async def find_by_id(session: AsyncSession, group_id: int) -> Group:
    group = await GroupDAO.find_one_or_none_by_id(session, group_id)
    if not group:
        raise NotFoundException(f"Group with id {group_id} not found")
    return group


async def _get_user_or_404(session: AsyncSession, user_id: int) -> User:
    user = await UserDAO.find_one_or_none_by_id(session, user_id)
    if not user:
        raise NotFoundException(f"User with id {user_id} not found")
    return user


async def create(session: AsyncSession, owner_id: int, data: GroupCreate) -> GroupOut:
    """Группа и членство владельца (ADMIN) пишутся одним коммитом."""
    owner = await _get_user_or_404(session, owner_id)

    group = Group(name=data.name, is_private=data.is_private, owner=owner)
    session.add(group)
    session.add(GroupMember(group=group, user=owner, role=GroupRole.ADMIN))
    await session.commit()

    logger.info(f"User {owner_id} created group {group.id} (private={group.is_private})")
    return to_group_out(group, is_member=True)


async def update(session: AsyncSession, group_id: int, data: GroupUpdate, user_id: int) -> GroupOut:
    group = await find_by_id(session, group_id)

    member = await GroupMemberDAO.find_member(session, group_id, user_id)
    if not member or member.role != GroupRole.ADMIN:
        raise NoPermissionsException("Only group admins can update the group")

    if data.description is not None:
        group.description = data.description
    if data.img_url is not None:
        group.image_url = data.img_url
    if data.color is not None:
        group.color = data.color

    await session.commit()
    return to_group_out(group, is_member=True)


async def delete(session: AsyncSession, group_id: int, owner_id: int) -> None:
    group = await find_by_id(session, group_id)
    if group.owner_id != owner_id:
        raise NoPermissionsException("You are not owner of this group")

    await session.delete(group)
    await session.commit()
    logger.info(f"Group {group_id} deleted by owner {owner_id}")


async def add_user_to_group(session: AsyncSession, group_id: int, user_id: int, initiated_by: int) -> bool:
    """
    Добавление пользователя в группу.
    Публичная группа - сразу членство с ролью MEMBER.
    Приватная - заявка со статусом PENDING: последняя существующая переоткрывается, иначе создаётся новая.
    Возвращает True, если членство создано.
    """
    group = await find_by_id(session, group_id)
    user = await _get_user_or_404(session, user_id)

    if await GroupMemberDAO.find_member(session, group_id, user_id):
        raise BadRequestException(f"User with Id {user_id} is already a member of this group")

    if user_id != initiated_by:
        await _get_user_or_404(session, initiated_by)
        if not await GroupMemberDAO.find_member(session, group_id, initiated_by):
            raise NoPermissionsException("Only group members can invite users to the group")

    if not group.is_private:
        session.add(GroupMember(group_id=group_id, user=user, role=GroupRole.MEMBER))
        created = True
    else:
        request = await GroupJoinRequestDAO.find_latest(session, group_id, user_id)
        if request:
            request.status = GroupJoinStatus.PENDING
            request.initiator_id = initiated_by
        else:
            session.add(GroupJoinRequest(
                group_id=group_id, user=user, initiator_id=initiated_by, status=GroupJoinStatus.PENDING
            ))
        created = False

    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise BadRequestException(f"User with Id {user_id} is already a member of this group")

    if created:
        logger.info(f"User {user_id} joined group {group_id}")
    else:
        logger.info(f"Join request for user {user_id} to group {group_id} is pending (initiator {initiated_by})")
    return created


async def respond_to_adding_request(
    session: AsyncSession,
    group_id: int,
    user_id: int,
    status: Union[str, GroupJoinStatus],
    responder_id: Optional[int] = None,
) -> bool:
    """
    Решение по заявке. APPROVED создаёт членство, REJECTED - нет.
    В обоих случаях заявка удаляется тем же коммитом.
    Отвечать может админ группы или сам приглашённый, если заявку создал кто-то другой.
    """
    status = parse_respond_status(status)
    await find_by_id(session, group_id)
    user = await _get_user_or_404(session, user_id)

    if await GroupMemberDAO.find_member(session, group_id, user_id):
        raise BadRequestException("This user is already a member of the group")

    request = await GroupJoinRequestDAO.find_latest(session, group_id, user_id)
    if not request:
        raise NotFoundException("Join request not found")

    if responder_id is not None:
        responder = await GroupMemberDAO.find_member(session, group_id, responder_id)
        is_admin = responder is not None and responder.role == GroupRole.ADMIN
        is_invited = responder_id == user_id and request.initiator_id != user_id
        if not (is_admin or is_invited):
            raise NoPermissionsException("You cannot respond to this join request")

    approved = status == GroupJoinStatus.APPROVED
    if approved:
        session.add(GroupMember(group_id=group_id, user=user, role=GroupRole.MEMBER))
    await session.delete(request)

    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise BadRequestException("This user is already a member of the group")

    logger.info(f"Join request of user {user_id} to group {group_id} resolved: {status.value}")
    return approved


async def get_group_members(session: AsyncSession, group_id: int) -> list[User]:
    await find_by_id(session, group_id)
    return [member.user for member in await GroupMemberDAO.find_by_group(session, group_id)]


async def get_group_requests(session: AsyncSession, group_id: int) -> list[User]:
    await find_by_id(session, group_id)
    requests = await GroupJoinRequestDAO.find_by_group(session, group_id)
    return [request.user for request in requests if request.status == GroupJoinStatus.PENDING]


async def get_all(session: AsyncSession, page: int, size: int, current_user_id: int) -> Page[GroupOut]:
    groups, total = await GroupDAO.find_page(session, page, size)
    member_of = await GroupMemberDAO.find_group_ids_of_user(session, current_user_id)
    content = [to_group_out(group, group.id in member_of) for group in groups]
    return Page[GroupOut].build(content, page, size, total)


async def get_group(session: AsyncSession, group_id: int, current_user_id: int) -> GroupOut:
    group = await find_by_id(session, group_id)
    is_member = await GroupMemberDAO.find_member(session, group_id, current_user_id) is not None
    return to_group_out(group, is_member)
