from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments.dao import CommentDAO
from app.comments.models import Comment
from app.comments.schemas import CommentOut
from app.exception import NoPermissionsException, NotFoundException
from app.notifications.models import NotificationType
from app.notifications.services import notify
from app.posts.services import get_post_or_404
from app.users.schemas import UserShort
from app.users.services import get_user_or_404


async def _get_comment_or_404(session: AsyncSession, comment_id: int) -> Comment:
    comment = await CommentDAO.find_one_or_none_by_id(session, comment_id)
    if not comment:
        raise NotFoundException(f"Not found comment with ID: {comment_id}")
    return comment


async def add_comment(session: AsyncSession, post_id: int, user_id: int, text: str) -> CommentOut:
    post = await get_post_or_404(session, post_id)
    user = await get_user_or_404(session, user_id)

    comment = Comment(post_id=post_id, user=user, text=text)
    session.add(comment)
    notify(session, post.user_id, user_id, post_id, NotificationType.COMMENT)
    await session.commit()

    logger.info(f"User {user_id} commented post {post_id}")
    return CommentOut(
        id=comment.id,
        post_id=post_id,
        user=UserShort.model_validate(user),
        text=comment.text,
        created_at=comment.created_at,
    )


async def get_post_comments(session: AsyncSession, post_id: int) -> list[CommentOut]:
    await get_post_or_404(session, post_id)
    return [CommentOut.model_validate(c) for c in await CommentDAO.find_by_post(session, post_id)]


async def update_comment(session: AsyncSession, comment_id: int, user_id: int, text: str) -> None:
    comment = await _get_comment_or_404(session, comment_id)
    if comment.user_id != user_id:
        raise NoPermissionsException("User does not have permission to update this comment")

    comment.text = text
    await session.commit()


async def delete_comment(session: AsyncSession, comment_id: int, user_id: int) -> None:
    comment = await _get_comment_or_404(session, comment_id)
    if comment.user_id != user_id:
        raise NoPermissionsException("User does not have permission to delete this comment")

    await session.delete(comment)
    await session.commit()
    logger.info(f"Comment {comment_id} deleted by user {user_id}")
