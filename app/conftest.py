"""
Общие фикстуры для тестов.
База - in-memory SQLite (aiosqlite), одна на тест; каталог достижений заполняется заранее.
"""
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Важно: импортируем все модели ДО создания таблиц,
# чтобы SQLAlchemy могла правильно разрешить relationships
from app import models  # noqa: F401
from app.achievements.services import seed_achievements
from app.auth.auth import create_access_token, get_password_hash
from app.database import Base, get_session
from app.users.models import Gender, User

TEST_PASSWORD = "password123"


@pytest_asyncio.fixture
async def session_maker():
    """Создаёт in-memory базу и фабрику сессий к ней."""
    # StaticPool: все сессии теста работают с одним соединением и видят одни данные
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite по умолчанию не проверяет внешние ключи, а каскады удаления на них опираются
    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        await seed_achievements(session)

    yield maker

    await engine.dispose()


@pytest_asyncio.fixture
async def fake_session(session_maker):
    """Создаёт фейковую сессию БД для тестов сервисов."""
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def make_user(fake_session):
    """Фабрика пользователей: await make_user("alice")."""
    async def _make(name: str, **fields) -> User:
        user = User(
            email=fields.pop("email", f"{name.lower()}@example.com"),
            password=fields.pop("password", get_password_hash(TEST_PASSWORD)),
            first_name=fields.pop("first_name", name.capitalize()),
            last_name=fields.pop("last_name", "Tester"),
            birthdate=fields.pop("birthdate", date(1995, 5, 17)),
            gender=fields.pop("gender", Gender.OTHER),
            **fields,
        )
        fake_session.add(user)
        await fake_session.commit()
        await fake_session.refresh(user)
        return user

    return _make


@pytest_asyncio.fixture
async def test_users(make_user):
    """Создаёт 3 тестовых пользователя."""
    return await make_user("alice"), await make_user("bob"), await make_user("carol")


def _auth_headers(user: User) -> dict[str, str]:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(session_maker):
    """HTTP-клиент к приложению; каждый запрос получает свою сессию к тестовой базе."""
    from app.main import app

    async def get_fake_session():
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = get_fake_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Заголовок Authorization с JWT для пользователя: auth_headers(user)."""
    return _auth_headers
