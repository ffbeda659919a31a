"""Database configuration module."""
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from sales_api.settings import settings

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db() -> AsyncSession:
    """Dependency for database session."""
    async with async_session() as session:
        yield session


def get_session_factory() -> async_sessionmaker:
    """Dependency for handlers that open their own sessions."""
    return async_session


async def init_db() -> None:
    """Create the transactions table if it does not exist yet."""
    # Register models on Base.metadata before create_all
    from sales_api.models import transaction  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
