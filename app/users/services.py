from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.exception import NotFoundException
from app.friends import services as friend_services
from app.responses import Page
from app.users.dao import UserDAO
from app.users.models import User
from app.users.schemas import FriendDetails, UserDetails, UserShort, UserUpdate


async def get_user_or_404(session: AsyncSession, user_id: int) -> User:
    user = await UserDAO.find_one_or_none_by_id(session, user_id)
    if not user:
        raise NotFoundException(f"User not found with id: {user_id}")
    return user


def to_short(users: list[User]) -> list[UserShort]:
    return [UserShort.model_validate(user) for user in users]


async def get_current_user_details(session: AsyncSession, user_id: int) -> UserDetails:
    user = await get_user_or_404(session, user_id)

    details = UserDetails.model_validate(user)
    details.friends = to_short(await friend_services.get_all_friend_users(session, user_id))
    details.friends_requests = to_short(await friend_services.get_all_users_who_sent_request(session, user_id))
    return details


async def get_friend_details(session: AsyncSession, user_id: int, current_user_id: int) -> FriendDetails:
    """Профиль другого пользователя: общие друзья отделены от остальных."""
    user = await get_user_or_404(session, user_id)
    await get_user_or_404(session, current_user_id)

    friends = to_short(await friend_services.get_all_friend_users(session, user_id))
    current_friend_ids = {
        friend.id for friend in await friend_services.get_all_friend_users(session, current_user_id)
    }

    details = FriendDetails.model_validate(user)
    details.mutual_friends = [friend for friend in friends if friend.id in current_friend_ids]
    details.friends = [friend for friend in friends if friend.id not in current_friend_ids]
    details.friends_requests = to_short(await friend_services.get_all_users_who_sent_request(session, user_id))
    return details


async def update_user(session: AsyncSession, user_id: int, data: UserUpdate) -> UserDetails:
    user = await get_user_or_404(session, user_id)

    for field, value in data.to_values().items():
        setattr(user, field, value)
    await session.commit()
    await session.refresh(user)

    logger.info(f"User {user_id} profile updated")
    return UserDetails.model_validate(user)


async def get_all_users_except_current(session: AsyncSession, user_id: int, page: int, size: int) -> Page[UserShort]:
    users, total = await UserDAO.find_page_except(session, user_id, page, size)
    return Page[UserShort].build(to_short(users), page, size, total)


async def search_users_by_full_name(session: AsyncSession, query: str) -> list[UserShort]:
    return to_short(await UserDAO.search_by_full_name(session, query))
