from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.achievements import services as achievement_services
from app.achievements.models import Achievements
from app.exception import BadRequestException, NoPermissionsException, NotFoundException
from app.friends import services as friend_services
from app.groups.dao import GroupDAO, GroupMemberDAO
from app.notifications.models import NotificationType
from app.notifications.services import notify
from app.posts.dao import LikeDAO, PostDAO, RepostDAO
from app.posts.models import Like, Post, PostImage, Repost
from app.posts.schemas import PostCreate, PostOut, PostUpdate
from app.responses import Page
from app.users.schemas import UserShort
from app.users.services import get_user_or_404

POSTS_WITH_IMAGES_FOR_ACHIEVEMENT = 5


def to_post_out(post: Post, counts: Optional[dict[str, int]] = None) -> PostOut:
    counts = counts or {}
    return PostOut(
        id=post.id,
        user=UserShort.model_validate(post.user),
        description=post.description,
        images=[image.image_url for image in post.images],
        group_id=post.group_id,
        created_at=post.created_at,
        likes_count=counts.get("likes", 0),
        comments_count=counts.get("comments", 0),
        reposts_count=counts.get("reposts", 0),
    )


async def to_post_out_list(session: AsyncSession, posts: list[Post]) -> list[PostOut]:
    counts = await PostDAO.counts(session, [post.id for post in posts])
    return [to_post_out(post, counts[post.id]) for post in posts]


async def get_post_or_404(session: AsyncSession, post_id: int) -> Post:
    post = await PostDAO.find_one_or_none_by_id(session, post_id)
    if not post:
        raise NotFoundException(f"Not found post with ID: {post_id}")
    return post


async def _award_post_achievements(session: AsyncSession, user_id: int) -> None:
    if await PostDAO.count(session, user_id=user_id) == 1:
        await achievement_services.award_achievement(session, user_id, Achievements.BUZZ_STARTED)

    if await PostDAO.count_with_images(session, user_id) >= POSTS_WITH_IMAGES_FOR_ACHIEVEMENT:
        await achievement_services.award_achievement(session, user_id, Achievements.AESTHETIC_DROP)


async def create_post(session: AsyncSession, user_id: int, data: PostCreate) -> PostOut:
    user = await get_user_or_404(session, user_id)

    if data.group_id is not None:
        group = await GroupDAO.find_one_or_none_by_id(session, data.group_id)
        if not group:
            raise NotFoundException(f"Group not found with id: {data.group_id}")
        if not await GroupMemberDAO.find_member(session, data.group_id, user_id):
            raise NoPermissionsException("Only group members can post in this group")

    post = Post(
        user=user,
        description=data.description,
        group_id=data.group_id,
        images=[PostImage(image_url=str(url)) for url in data.images],
    )
    session.add(post)
    await session.commit()
    logger.info(f"User {user_id} created post {post.id}")

    await _award_post_achievements(session, user_id)
    return to_post_out(post)


async def update_post(session: AsyncSession, post_id: int, user_id: int, data: PostUpdate) -> PostOut:
    post = await get_post_or_404(session, post_id)
    if post.user_id != user_id:
        raise NoPermissionsException("User does not have permission to update this post")

    if data.description is not None:
        post.description = data.description
    for url in data.images:
        post.images.append(PostImage(image_url=str(url)))

    await session.commit()
    counts = await PostDAO.counts(session, [post.id])
    return to_post_out(post, counts[post.id])


async def delete_post(session: AsyncSession, post_id: int, user_id: int) -> None:
    """
    Автор удаляет пост целиком (вместе с картинками, комментариями, лайками, репостами).
    Любой другой пользователь может убрать только свой репост этого поста.
    """
    post = await get_post_or_404(session, post_id)

    if post.user_id != user_id:
        repost = await RepostDAO.find_by_user_and_post(session, user_id, post_id)
        if not repost:
            raise NoPermissionsException("User does not have permission to delete this post")
        await session.delete(repost)
        await session.commit()
        logger.info(f"User {user_id} removed repost of post {post_id}")
        return

    await session.delete(post)
    await session.commit()
    logger.info(f"User {user_id} deleted post {post_id}")


async def like_post(session: AsyncSession, post_id: int, user_id: int) -> int:
    """Лайк работает как переключатель. Возвращает текущее число лайков."""
    post = await get_post_or_404(session, post_id)
    await get_user_or_404(session, user_id)

    like = await LikeDAO.find_by_user_and_post(session, user_id, post_id)
    if like:
        await session.delete(like)
    else:
        session.add(Like(user_id=user_id, post_id=post_id))
        notify(session, post.user_id, user_id, post_id, NotificationType.LIKE)

    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise BadRequestException("User has already liked this post")

    return await LikeDAO.count(session, post_id=post_id)


async def repost(session: AsyncSession, post_id: int, user_id: int) -> int:
    post = await get_post_or_404(session, post_id)
    await get_user_or_404(session, user_id)

    if post.user_id == user_id:
        raise BadRequestException("User cannot repost their own post")
    if await RepostDAO.find_by_user_and_post(session, user_id, post_id):
        raise BadRequestException("User has already reposted this post")

    session.add(Repost(user_id=user_id, post_id=post_id))
    notify(session, post.user_id, user_id, post_id, NotificationType.REPOST)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise BadRequestException("User has already reposted this post")

    logger.info(f"User {user_id} reposted post {post_id}")
    return await RepostDAO.count(session, post_id=post_id)


async def get_user_posts(session: AsyncSession, user_id: int) -> list[PostOut]:
    """Свои посты пользователя и его репосты, новые сверху."""
    await get_user_or_404(session, user_id)

    posts = {post.id: post for post in await PostDAO.find_all_by_user(session, user_id)}
    for post in await PostDAO.find_reposted_by_user(session, user_id):
        posts.setdefault(post.id, post)

    ordered = sorted(posts.values(), key=lambda p: (p.created_at, p.id), reverse=True)
    return await to_post_out_list(session, ordered)


async def get_user_and_friends_posts(session: AsyncSession, user_id: int, page: int, size: int) -> Page[PostOut]:
    await get_user_or_404(session, user_id)

    user_ids = [user_id] + [friend.id for friend in await friend_services.get_all_friend_users(session, user_id)]
    posts, total = await PostDAO.find_page_by_users(session, user_ids, page, size)
    return Page[PostOut].build(await to_post_out_list(session, posts), page, size, total)


async def get_group_posts(session: AsyncSession, group_id: int) -> list[PostOut]:
    if not await GroupDAO.find_one_or_none_by_id(session, group_id):
        raise NotFoundException(f"Group not found with id: {group_id}")
    return await to_post_out_list(session, await PostDAO.find_by_group(session, group_id))
