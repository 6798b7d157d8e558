"""Pytest configuration and fixtures for TokenForge backend tests"""
import os
import pytest
import pytest_asyncio
from typing import AsyncGenerator
from dotenv import load_dotenv

# Load environment variables, then point the app at an in-memory database
load_dotenv()
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tokenforge.config import get_settings  # noqa: E402
from tokenforge.main import app  # noqa: E402
from tokenforge.models.database import Base, get_db  # noqa: E402

from fixtures.sample_tokens import multi_block_configuration, sample_block, sample_configuration  # noqa: E402

@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a database session on a fresh in-memory database for each test"""
    # StaticPool keeps the single in-memory connection alive across sessions
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    session = session_factory()
    try:
        yield session
    finally:
        await session.close()
        await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def settings():
    """The cached settings instance; changes are undone by monkeypatch"""
    return get_settings()


@pytest.fixture
def erc20_block():
    return sample_block("ERC20")


@pytest.fixture
def token_configuration():
    """Single-block ERC20 configuration in export shape"""
    return sample_configuration("ERC20")


@pytest.fixture
def multi_block_token():
    """ERC1400 configuration with a pegged ERC20 block"""
    return multi_block_configuration()
