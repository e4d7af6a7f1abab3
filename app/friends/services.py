from datetime import datetime
from typing import Optional, Union

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exception import BadRequestException, NotFoundException
from app.friends.dao import FriendDAO
from app.friends.models import Friend, FriendStatus
from app.users.dao import UserDAO
from app.users.models import User


async def _get_users_or_404(session: AsyncSession, user_id: int, friend_id: int) -> tuple[User, User]:
    user = await UserDAO.find_one_or_none_by_id(session, user_id)
    if not user:
        raise NotFoundException("User not found")
    friend = await UserDAO.find_one_or_none_by_id(session, friend_id)
    if not friend:
        raise NotFoundException("Friend not found")
    return user, friend


def parse_status(status: Union[str, FriendStatus]) -> FriendStatus:
    """Статус ответа на заявку: только ACCEPTED или DECLINED (регистр не важен)."""
    try:
        parsed = FriendStatus(status.upper() if isinstance(status, str) else status)
    except ValueError:
        raise BadRequestException("Invalid status")
    if parsed not in (FriendStatus.ACCEPTED, FriendStatus.DECLINED):
        raise BadRequestException("Invalid status")
    return parsed


async def is_friend(session: AsyncSession, user_id: int, friend_id: int) -> bool:
    # Дружба хранится одним направленным ребром, симметрия - только на чтении
    return await FriendDAO.exists(session, user_id, friend_id, status=FriendStatus.ACCEPTED)


async def add_friend_request(session: AsyncSession, user_id: int, friend_id: int) -> Friend:
    """
    Заявка в друзья от user_id к friend_id.
    Сохраняется как ребро (user=friend_id, friend=user_id) со статусом PENDING.
    """
    if user_id == friend_id:
        raise BadRequestException("You cannot send a friend request to yourself")

    await _get_users_or_404(session, user_id, friend_id)

    # На пару пользователей хранится не больше одного ребра
    existing = await FriendDAO.find_edge(session, user_id=friend_id, friend_id=user_id)
    reverse = await FriendDAO.find_edge(session, user_id=user_id, friend_id=friend_id)
    for found in (existing, reverse):
        if found and found.status == FriendStatus.ACCEPTED:
            raise BadRequestException("Users are already friends")
    if existing:
        raise BadRequestException("Friend request already exists")
    if reverse:
        raise BadRequestException("This user has already sent you a friend request")

    edge = Friend(user_id=friend_id, friend_id=user_id, status=FriendStatus.PENDING)
    session.add(edge)
    try:
        await session.commit()
    except IntegrityError:
        # Параллельная заявка успела вставиться первой
        await session.rollback()
        raise BadRequestException("Friend request already exists")

    logger.info(f"Friend request from user {user_id} to user {friend_id} created")
    return edge


async def respond_to_friend_request(
    session: AsyncSession, user_id: int, friend_id: int, status: Union[str, FriendStatus]
) -> Optional[Friend]:
    """
    Ответ получателя (user_id) на заявку от friend_id.
    ACCEPTED переводит ребро в ACCEPTED, DECLINED удаляет его.
    """
    if user_id == friend_id:
        raise BadRequestException("You cannot respond to your own friend request")

    status = parse_status(status)
    await _get_users_or_404(session, user_id, friend_id)

    edge = await FriendDAO.find_edge(session, user_id=user_id, friend_id=friend_id)
    if not edge:
        raise NotFoundException("Friend request doesn't exist")
    if edge.status != FriendStatus.PENDING:
        raise BadRequestException("Friend request has already been answered")

    if status == FriendStatus.ACCEPTED:
        edge.status = FriendStatus.ACCEPTED
        edge.accepted_at = datetime.utcnow()
        await session.commit()
        logger.info(f"User {user_id} accepted friend request from user {friend_id}")
        return edge

    await session.delete(edge)
    await session.commit()
    logger.info(f"User {user_id} declined friend request from user {friend_id}")
    return None


async def delete_friend(session: AsyncSession, user_id: int, friend_id: int) -> None:
    """
    Удаляет дружбу или заявку между пользователями.
    Ребро ищется сначала как (user_id, friend_id), затем в обратную сторону,
    так что удалить связь может любая из сторон, включая отправителя заявки.
    """
    edge = await FriendDAO.find_edge(session, user_id=user_id, friend_id=friend_id)
    if not edge:
        edge = await FriendDAO.find_edge(session, user_id=friend_id, friend_id=user_id)
    if not edge:
        raise NotFoundException("Friend not found")

    await session.delete(edge)
    await session.commit()
    logger.info(f"Friend edge {edge.user_id} -> {edge.friend_id} removed by user {user_id}")


async def get_all_friend_users(session: AsyncSession, user_id: int) -> list[User]:
    friends: dict[int, User] = {}
    for edge in await FriendDAO.find_by_status_and_user(session, FriendStatus.ACCEPTED, user_id):
        friends.setdefault(edge.friend_id, edge.friend)
    for edge in await FriendDAO.find_by_status_and_friend(session, FriendStatus.ACCEPTED, user_id):
        friends.setdefault(edge.user_id, edge.user)
    return list(friends.values())


async def get_all_users_who_sent_request(session: AsyncSession, user_id: int) -> list[User]:
    """Входящие заявки: кто отправил заявку пользователю."""
    edges = await FriendDAO.find_by_status_and_user(session, FriendStatus.PENDING, user_id)
    return [edge.friend for edge in edges]


async def get_all_users_whom_sent_request(session: AsyncSession, user_id: int) -> list[User]:
    """Исходящие заявки: кому пользователь отправил заявку."""
    edges = await FriendDAO.find_by_status_and_friend(session, FriendStatus.PENDING, user_id)
    return [edge.user for edge in edges]


async def get_recommended_friends(session: AsyncSession, user_id: int) -> list[User]:
    """
    Друзья друзей, с которыми у пользователя ещё нет никакой связи.
    Если их не хватает до лимита - добираем самыми новыми пользователями.
    """
    limit = settings.RECOMMENDED_FRIENDS_LIMIT
    excluded = await FriendDAO.find_connected_ids(session, user_id)
    excluded.add(user_id)

    result: dict[int, User] = {}
    for friend in await get_all_friend_users(session, user_id):
        for candidate in await get_all_friend_users(session, friend.id):
            if candidate.id not in excluded:
                result.setdefault(candidate.id, candidate)
        if len(result) >= limit:
            break

    if len(result) < limit:
        for candidate in await UserDAO.find_newest_except(session, user_id, limit):
            if candidate.id not in excluded:
                result.setdefault(candidate.id, candidate)

    return list(result.values())[:limit]
