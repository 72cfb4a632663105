from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from src.conf.config import settings


engine = create_async_engine(settings.database_url, echo=settings.debug)

AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)
Base = declarative_base()

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get an asynchronous database session for production.
    This will be overridden in testing environments.
    """
    db = AsyncSessionLocal()
    try:
        yield db
    finally:
        await db.close()


async def init_models(bind_engine: AsyncEngine = engine) -> None:
    """
    Connect to the store and create the users and contacts tables if they are missing.

    :param bind_engine: Engine to connect with.
    :raises SQLAlchemyError: If the database cannot be reached.
    """
    async with bind_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
