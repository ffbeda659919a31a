"""Pytest fixtures for a temporary async SQLite store."""
import httpx
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from sales_api.app import app
from sales_api.database.database import Base, get_db, get_session_factory
from sales_api.models.transaction import Transaction


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Create a throwaway on-disk SQLite store with the transactions table."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def sample_transactions(db_session):
    """Create sample transactions spread over March and April."""
    transactions = [
        # March
        Transaction(
            title="Fjallraven Backpack",
            price=109.95,
            description="Your perfect pack for everyday use",
            category="men's clothing",
            image="https://example.com/1.jpg",
            sold=1,
            date_of_sale="2022-03-27T20:29:54+05:30",
        ),
        Transaction(
            title="Mens Casual Slim Fit",
            price=15.99,
            description="The color could be slightly different",
            category="men's clothing",
            image="https://example.com/2.jpg",
            sold=0,
            date_of_sale="2022-03-15T10:00:00+05:30",
        ),
        Transaction(
            title="Solid Gold Petite Micropave",
            price=168.0,
            description="Satisfaction Guaranteed",
            category="jewelery",
            image="https://example.com/3.jpg",
            sold=1,
            date_of_sale="2021-03-10T12:00:00+05:30",
        ),
        Transaction(
            title="Samsung 49-Inch Monitor",
            price=999.99,
            description="49 inch super ultrawide curved gaming monitor",
            category="electronics",
            image="https://example.com/4.jpg",
            sold=0,
            date_of_sale="2022-03-05T09:00:00+05:30",
        ),
        Transaction(
            title="WD 4TB Gaming Drive",
            price=114.0,
            description="Expand your PS4 gaming experience",
            category="electronics",
            image="https://example.com/5.jpg",
            sold=1,
            date_of_sale="2022-03-20T18:00:00+05:30",
        ),
        # April
        Transaction(
            title="Rain Jacket Women Windbreaker",
            price=39.99,
            description="Lightweight perfect for trip or casual wear",
            category="women's clothing",
            image="https://example.com/6.jpg",
            sold=1,
            date_of_sale="2022-04-12T11:00:00+05:30",
        ),
        Transaction(
            title="Acer SB220Q Monitor",
            price=599.0,
            description="21.5 inches Full HD widescreen IPS display",
            category="electronics",
            image="https://example.com/7.jpg",
            sold=0,
            date_of_sale="2022-04-22T14:00:00+05:30",
        ),
    ]
    db_session.add_all(transactions)
    await db_session.commit()
    return transactions


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client bound to the app with the store swapped for the test store."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
