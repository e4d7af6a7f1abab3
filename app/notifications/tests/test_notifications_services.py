import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.exception import NoPermissionsException, NotFoundException
from app.notifications import services
from app.notifications.models import NotificationType
from app.posts.models import Post


@pytest.fixture
def alice_post(fake_session: AsyncSession, test_users):
    async def _make() -> Post:
        post = Post(user_id=test_users[0].id, description="post")
        fake_session.add(post)
        await fake_session.commit()
        return post

    return _make


@pytest.mark.asyncio
async def test_notify_skips_self_actions(fake_session: AsyncSession, test_users, alice_post):
    alice, bob, _ = test_users
    post = await alice_post()

    assert services.notify(fake_session, alice.id, alice.id, post.id, NotificationType.LIKE) is None
    notification = services.notify(fake_session, alice.id, bob.id, post.id, NotificationType.LIKE)
    await fake_session.commit()

    assert notification.id is not None
    assert [n.id for n in await services.get_notifications(fake_session, alice.id)] == [notification.id]
    assert await services.get_notifications(fake_session, bob.id) == []


@pytest.mark.asyncio
async def test_mark_as_read_by_recipient_only(fake_session: AsyncSession, test_users, alice_post):
    alice, bob, _ = test_users
    post = await alice_post()
    notification = services.notify(fake_session, alice.id, bob.id, post.id, NotificationType.COMMENT)
    await fake_session.commit()

    with pytest.raises(NoPermissionsException):
        await services.mark_as_read(fake_session, notification.id, bob.id)
    with pytest.raises(NotFoundException):
        await services.mark_as_read(fake_session, 9999, alice.id)

    read = await services.mark_as_read(fake_session, notification.id, alice.id)
    assert read.is_read is True
    assert await services.get_notifications(fake_session, alice.id, unread_only=True) == []


@pytest.mark.asyncio
async def test_mark_all_as_read(fake_session: AsyncSession, test_users, alice_post):
    alice, bob, carol = test_users
    post = await alice_post()
    services.notify(fake_session, alice.id, bob.id, post.id, NotificationType.LIKE)
    services.notify(fake_session, alice.id, carol.id, post.id, NotificationType.REPOST)
    await fake_session.commit()

    assert len(await services.get_notifications(fake_session, alice.id, unread_only=True)) == 2
    assert await services.mark_all_as_read(fake_session, alice.id) == 2
    assert await services.get_notifications(fake_session, alice.id, unread_only=True) == []
    assert await services.mark_all_as_read(fake_session, alice.id) == 0
