import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.achievements import services
from app.achievements.models import Achievement, Achievements
from app.exception import BadRequestException


@pytest.mark.asyncio
async def test_catalogue_is_seeded_once(fake_session: AsyncSession):
    total = await fake_session.scalar(select(func.count(Achievement.id)))

    assert total == len(Achievements)
    assert await services.seed_achievements(fake_session) == 0

    premium = await fake_session.scalar(select(Achievement).where(Achievement.name == "Premium Player"))
    assert premium.is_premium is True
    assert premium.description == 'Achievement "Premium Player"'


@pytest.mark.asyncio
async def test_award_achievement_is_idempotent(fake_session: AsyncSession, test_users):
    alice, bob, _ = test_users

    assert await services.award_achievement(fake_session, alice.id, Achievements.BUZZ_STARTED) is True
    assert await services.award_achievement(fake_session, alice.id, "Buzz Started") is False

    achievements = await services.get_all_achievements_of_user(fake_session, alice.id)
    assert [a.name for a in achievements] == ["Buzz Started"]
    assert await services.user_have_achievement(fake_session, alice.id, Achievements.BUZZ_STARTED)
    assert not await services.user_have_achievement(fake_session, bob.id, Achievements.BUZZ_STARTED)


@pytest.mark.asyncio
async def test_award_unknown_achievement(fake_session: AsyncSession, test_users):
    alice, _, _ = test_users
    with pytest.raises(BadRequestException):
        await services.award_achievement(fake_session, alice.id, "Does Not Exist")
