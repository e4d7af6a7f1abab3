from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.exception import BadRequestException, NoPermissionsException, NotFoundException
from app.messages.dao import MessageDAO
from app.messages.models import Message
from app.messages.schemas import MessageOut, UserMessage
from app.responses import Page
from app.users.dao import UserDAO
from app.users.models import User


def _to_out(message: Message, sender: User, receiver: User) -> MessageOut:
    return MessageOut(
        id=message.id,
        sender=UserMessage.model_validate(sender),
        receiver=UserMessage.model_validate(receiver),
        text=message.text,
        is_read=message.is_read,
        created_at=message.created_at,
    )


async def _get_message_or_404(session: AsyncSession, message_id: int) -> Message:
    message = await MessageDAO.find_one_or_none_by_id(session, message_id)
    if not message:
        raise NotFoundException("Message not found")
    return message


async def create(session: AsyncSession, sender_id: int, receiver_id: int, text: str) -> MessageOut:
    if sender_id == receiver_id:
        raise BadRequestException("You cannot send a message to yourself")

    sender = await UserDAO.find_one_or_none_by_id(session, sender_id)
    if not sender:
        raise NotFoundException("Sender not found")
    receiver = await UserDAO.find_one_or_none_by_id(session, receiver_id)
    if not receiver:
        raise NotFoundException("Receiver not found")

    message = Message(sender=sender, receiver=receiver, text=text, is_read=False)
    session.add(message)
    await session.commit()

    logger.info(f"Message {message.id} sent from user {sender_id} to user {receiver_id}")
    return _to_out(message, sender, receiver)


async def get_messages_with_friend(
    session: AsyncSession, user_id: int, friend_id: int, page: int, size: int
) -> Page[MessageOut]:
    if not await UserDAO.find_one_or_none_by_id(session, friend_id):
        raise NotFoundException(f"User not found with id: {friend_id}")

    messages, total = await MessageDAO.find_dialog_page(session, user_id, friend_id, page, size)
    content = [MessageOut.model_validate(m) for m in messages]
    return Page[MessageOut].build(content, page, size, total)


async def update(session: AsyncSession, message_id: int, user_id: int, text: str) -> MessageOut:
    message = await _get_message_or_404(session, message_id)
    if message.sender_id != user_id:
        raise NoPermissionsException("Only the sender can edit the message")

    message.text = text
    await session.commit()
    return MessageOut.model_validate(message)


async def read(session: AsyncSession, message_id: int, user_id: int) -> MessageOut:
    message = await _get_message_or_404(session, message_id)
    if message.receiver_id != user_id:
        raise NoPermissionsException("Only the receiver can mark the message as read")

    message.is_read = True
    await session.commit()
    return MessageOut.model_validate(message)


async def delete(session: AsyncSession, message_id: int, user_id: int) -> None:
    message = await _get_message_or_404(session, message_id)
    if message.sender_id != user_id:
        raise NoPermissionsException("Only the sender can delete the message")

    await session.delete(message)
    await session.commit()
    logger.info(f"Message {message_id} deleted by user {user_id}")
