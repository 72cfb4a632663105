import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from src.main import app
from src.database.db import get_db, Base
from src.database.models import User
from src.auth.auth import get_password_hash, create_access_token
from src.client.api import ContactsApi
from src.conf.config import settings

TEST_DATABASE_URL = settings.database_test_url
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest_asyncio.fixture
async def prepare_database():
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session(prepare_database) -> AsyncSession:
    async with TestSessionLocal() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest_asyncio.fixture
async def test_client(db_session: AsyncSession):
    async def override_get_db_for_test_client():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db_for_test_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        try:
            yield client
        finally:
            app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def api_client(db_session: AsyncSession):
    """ContactsApi talking to the in-process application."""
    async def override_get_db_for_api_client():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db_for_api_client

    async with ContactsApi(base_url="http://test", transport=ASGITransport(app=app)) as api:
        try:
            yield api
        finally:
            app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture()
async def session(db_session: AsyncSession):
    yield db_session


async def create_test_user(session: AsyncSession, email: str, username: str = "tester",
                           password: str = "password123") -> User:
    user = User(username=username, email=email, hashed_password=get_password_hash(password))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(session: AsyncSession):
    return await create_test_user(session, "testuser@example.com")


@pytest_asyncio.fixture
async def other_user(session: AsyncSession):
    return await create_test_user(session, "otheruser@example.com", username="other")


@pytest_asyncio.fixture
async def token(test_user):
    return create_access_token(data={"sub": test_user.email})


@pytest_asyncio.fixture
async def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def other_auth_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token(data={'sub': other_user.email})}"}
