"""
Тесты личных сообщений.
Тестирует:
- Отправку (в том числе самому себе и несуществующим пользователям)
- Переписку двух пользователей постранично
- Права отправителя / получателя на изменение, прочтение и удаление
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.exception import BadRequestException, NoPermissionsException, NotFoundException
from app.messages import services


@pytest.mark.asyncio
async def test_create_message(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    message = await services.create(fake_session, alice.id, bob.id, "Hi Bob")

    assert message.sender.id == alice.id
    assert message.receiver.id == bob.id
    assert message.receiver.first_name == "Bob"
    assert message.text == "Hi Bob"
    assert message.is_read is False


@pytest.mark.asyncio
async def test_create_message_to_yourself(fake_session: AsyncSession, test_users):
    alice, _, _ = test_users
    with pytest.raises(BadRequestException):
        await services.create(fake_session, alice.id, alice.id, "note to self")


@pytest.mark.asyncio
async def test_create_message_unknown_users(fake_session: AsyncSession, test_users):
    alice, _, _ = test_users

    with pytest.raises(NotFoundException, match="Receiver not found"):
        await services.create(fake_session, alice.id, 9999, "anyone?")
    with pytest.raises(NotFoundException, match="Sender not found"):
        await services.create(fake_session, 9999, alice.id, "boo")


@pytest.mark.asyncio
async def test_dialog_contains_both_directions(fake_session: AsyncSession, test_users):
    alice, bob, carol = test_users
    first = await services.create(fake_session, alice.id, bob.id, "1")
    second = await services.create(fake_session, bob.id, alice.id, "2")
    await services.create(fake_session, carol.id, alice.id, "not in dialog")
    third = await services.create(fake_session, alice.id, bob.id, "3")

    page = await services.get_messages_with_friend(fake_session, alice.id, bob.id, 0, 10)

    assert page.total_elements == 3
    assert {m.id for m in page.content} == {first.id, second.id, third.id}

    second_page = await services.get_messages_with_friend(fake_session, bob.id, alice.id, 1, 2)
    assert len(second_page.content) == 1
    assert second_page.last is True


@pytest.mark.asyncio
async def test_dialog_with_unknown_user(fake_session: AsyncSession, test_users):
    alice, _, _ = test_users
    with pytest.raises(NotFoundException):
        await services.get_messages_with_friend(fake_session, alice.id, 9999, 0, 10)


@pytest.mark.asyncio
async def test_only_sender_can_edit(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users
    message = await services.create(fake_session, alice.id, bob.id, "helo")

    with pytest.raises(NoPermissionsException):
        await services.update(fake_session, message.id, bob.id, "hello")

    updated = await services.update(fake_session, message.id, alice.id, "hello")
    assert updated.text == "hello"


@pytest.mark.asyncio
async def test_only_receiver_can_read(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users
    message = await services.create(fake_session, alice.id, bob.id, "ping")

    with pytest.raises(NoPermissionsException):
        await services.read(fake_session, message.id, alice.id)

    read = await services.read(fake_session, message.id, bob.id)
    assert read.is_read is True


@pytest.mark.asyncio
async def test_only_sender_can_delete(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users
    message = await services.create(fake_session, alice.id, bob.id, "regret")

    with pytest.raises(NoPermissionsException):
        await services.delete(fake_session, message.id, bob.id)

    await services.delete(fake_session, message.id, alice.id)
    with pytest.raises(NotFoundException):
        await services.read(fake_session, message.id, bob.id)
