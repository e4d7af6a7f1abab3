"""
Тесты жизненного цикла заявок в друзья.
Тестирует:
- Повторную заявку в том же направлении
- Принятие / отклонение и повторную заявку после отклонения
- Симметричность is_friend и запрет встречной заявки
- Удаление связи любой из сторон
- Списки друзей, входящих и исходящих заявок, рекомендации
"""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exception import BadRequestException, NotFoundException
from app.friends import services
from app.friends.models import Friend, FriendStatus


async def _edges_count(session: AsyncSession) -> int:
    return await session.scalar(select(func.count(Friend.id)))


@pytest.mark.asyncio
async def test_add_friend_request_creates_pending_edge(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    edge = await services.add_friend_request(fake_session, alice.id, bob.id)

    # Заявка хранится ребром (получатель -> отправитель)
    assert edge.user_id == bob.id
    assert edge.friend_id == alice.id
    assert edge.status == FriendStatus.PENDING
    assert edge.accepted_at is None


@pytest.mark.asyncio
async def test_add_friend_request_twice_is_rejected(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    with pytest.raises(BadRequestException):
        await services.add_friend_request(fake_session, alice.id, bob.id)

    assert await _edges_count(fake_session) == 1


@pytest.mark.asyncio
async def test_add_friend_request_to_yourself(fake_session: AsyncSession, test_users):
    alice, _, _ = test_users

    with pytest.raises(BadRequestException):
        await services.add_friend_request(fake_session, alice.id, alice.id)
    assert await _edges_count(fake_session) == 0


@pytest.mark.asyncio
async def test_add_friend_request_unknown_user(fake_session: AsyncSession, test_users):
    alice, _, _ = test_users

    with pytest.raises(NotFoundException):
        await services.add_friend_request(fake_session, alice.id, 9999)
    with pytest.raises(NotFoundException):
        await services.add_friend_request(fake_session, 9999, alice.id)


@pytest.mark.asyncio
async def test_add_friend_request_when_already_friends(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    await services.respond_to_friend_request(fake_session, bob.id, alice.id, FriendStatus.ACCEPTED)

    with pytest.raises(BadRequestException):
        await services.add_friend_request(fake_session, bob.id, alice.id)
    assert await _edges_count(fake_session) == 1


@pytest.mark.asyncio
async def test_accept_without_pending_edge(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    with pytest.raises(NotFoundException):
        await services.respond_to_friend_request(fake_session, bob.id, alice.id, "ACCEPTED")
    assert await _edges_count(fake_session) == 0


@pytest.mark.asyncio
async def test_accept_keeps_single_directed_edge(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    edge = await services.respond_to_friend_request(fake_session, bob.id, alice.id, "accepted")

    assert edge.status == FriendStatus.ACCEPTED
    assert edge.accepted_at is not None
    # Обратное ребро не создаётся
    assert await _edges_count(fake_session) == 1


@pytest.mark.asyncio
async def test_is_friend_is_symmetric_after_accept(fake_session: AsyncSession, test_users):
    alice, bob, carol = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    assert not await services.is_friend(fake_session, alice.id, bob.id)

    await services.respond_to_friend_request(fake_session, bob.id, alice.id, FriendStatus.ACCEPTED)

    assert await services.is_friend(fake_session, alice.id, bob.id)
    assert await services.is_friend(fake_session, bob.id, alice.id)
    assert not await services.is_friend(fake_session, alice.id, carol.id)


@pytest.mark.asyncio
async def test_decline_removes_edge_and_allows_new_request(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    result = await services.respond_to_friend_request(fake_session, bob.id, alice.id, FriendStatus.DECLINED)

    assert result is None
    assert await _edges_count(fake_session) == 0

    edge = await services.add_friend_request(fake_session, alice.id, bob.id)
    assert edge.status == FriendStatus.PENDING
    assert await _edges_count(fake_session) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["PENDING", "maybe", ""])
async def test_respond_with_invalid_status(fake_session: AsyncSession, test_users, status):
    alice, bob, _ = test_users
    await services.add_friend_request(fake_session, alice.id, bob.id)

    with pytest.raises(BadRequestException):
        await services.respond_to_friend_request(fake_session, bob.id, alice.id, status)

    edge = await fake_session.scalar(select(Friend))
    assert edge.status == FriendStatus.PENDING


@pytest.mark.asyncio
async def test_mutual_request_is_rejected(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    with pytest.raises(BadRequestException):
        await services.add_friend_request(fake_session, bob.id, alice.id)

    # Встречная заявка не создаёт второго ребра
    assert await _edges_count(fake_session) == 1
    edge = await fake_session.scalar(select(Friend))
    assert (edge.user_id, edge.friend_id) == (bob.id, alice.id)


@pytest.mark.asyncio
async def test_respond_to_already_accepted_request(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    edge = await services.respond_to_friend_request(fake_session, bob.id, alice.id, FriendStatus.ACCEPTED)
    accepted_at = edge.accepted_at

    with pytest.raises(BadRequestException):
        await services.respond_to_friend_request(fake_session, bob.id, alice.id, FriendStatus.ACCEPTED)
    with pytest.raises(BadRequestException):
        await services.respond_to_friend_request(fake_session, bob.id, alice.id, FriendStatus.DECLINED)

    await fake_session.refresh(edge)
    assert edge.status == FriendStatus.ACCEPTED
    assert edge.accepted_at == accepted_at
    assert await _edges_count(fake_session) == 1


@pytest.mark.asyncio
async def test_sender_can_delete_friend(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    await services.respond_to_friend_request(fake_session, bob.id, alice.id, FriendStatus.ACCEPTED)

    await services.delete_friend(fake_session, alice.id, bob.id)
    assert await _edges_count(fake_session) == 0
    assert not await services.is_friend(fake_session, bob.id, alice.id)

    with pytest.raises(NotFoundException):
        await services.delete_friend(fake_session, alice.id, bob.id)


@pytest.mark.asyncio
async def test_recipient_can_delete_friend(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    await services.respond_to_friend_request(fake_session, bob.id, alice.id, FriendStatus.ACCEPTED)

    await services.delete_friend(fake_session, bob.id, alice.id)
    assert await _edges_count(fake_session) == 0
    assert not await services.is_friend(fake_session, alice.id, bob.id)


@pytest.mark.asyncio
async def test_sender_can_withdraw_pending_request(fake_session: AsyncSession, test_users):
    alice, bob, carol = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    await services.delete_friend(fake_session, alice.id, bob.id)

    assert await _edges_count(fake_session) == 0
    assert await services.get_all_users_who_sent_request(fake_session, bob.id) == []
    with pytest.raises(NotFoundException):
        await services.delete_friend(fake_session, alice.id, carol.id)

@pytest.mark.asyncio
async def test_friend_lists(fake_session: AsyncSession, test_users):
    alice, bob, carol = test_users

    await services.add_friend_request(fake_session, alice.id, bob.id)
    await services.respond_to_friend_request(fake_session, bob.id, alice.id, FriendStatus.ACCEPTED)
    await services.add_friend_request(fake_session, carol.id, alice.id)

    assert [u.id for u in await services.get_all_friend_users(fake_session, alice.id)] == [bob.id]
    assert [u.id for u in await services.get_all_friend_users(fake_session, bob.id)] == [alice.id]
    assert [u.id for u in await services.get_all_users_who_sent_request(fake_session, alice.id)] == [carol.id]
    assert [u.id for u in await services.get_all_users_whom_sent_request(fake_session, carol.id)] == [alice.id]
    assert await services.get_all_users_whom_sent_request(fake_session, alice.id) == []


@pytest.mark.asyncio
async def test_recommended_friends(fake_session: AsyncSession, make_user, test_users):
    alice, bob, carol = test_users
    dave = await make_user("dave")

    # alice - bob - carol: carol рекомендована alice как друг друга
    await services.add_friend_request(fake_session, alice.id, bob.id)
    await services.respond_to_friend_request(fake_session, bob.id, alice.id, FriendStatus.ACCEPTED)
    await services.add_friend_request(fake_session, carol.id, bob.id)
    await services.respond_to_friend_request(fake_session, bob.id, carol.id, FriendStatus.ACCEPTED)

    recommended = [u.id for u in await services.get_recommended_friends(fake_session, alice.id)]

    assert recommended[0] == carol.id
    assert dave.id in recommended
    assert alice.id not in recommended
    assert bob.id not in recommended


@pytest.mark.asyncio
async def test_recommended_friends_respects_limit(fake_session: AsyncSession, make_user, monkeypatch):
    monkeypatch.setattr(settings, "RECOMMENDED_FRIENDS_LIMIT", 2)
    me = await make_user("me")
    for i in range(4):
        await make_user(f"user{i}")

    recommended = await services.get_recommended_friends(fake_session, me.id)

    assert len(recommended) == 2
