"""
Shared pytest fixtures for all tests.

This module provides common fixtures for database sessions, event
publishers and customer test data.
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"

from app.config.settings import reset_settings  # noqa: E402
from app.core.domain import Address, DomainEvent, DomainEventPublisher, Email, Money  # noqa: E402
from app.domains.customer.domain.entities.customer import Customer  # noqa: E402
from app.domains.customer.infrastructure.persistence.sqlalchemy.models import CustomerModel  # noqa: E402, F401
from app.models.db.base import Base  # noqa: E402


# ============================================================================
# SETTINGS
# ============================================================================


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop the cached settings so env changes in a test stay local."""
    reset_settings()
    yield
    reset_settings()


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def db_url() -> str:
    """Return test database URL."""
    return os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture
async def async_engine(db_url: str):
    """Create async database engine with the customer schema."""
    engine_kwargs = {"echo": False}
    if db_url.startswith("sqlite"):
        # One shared connection keeps the in-memory database alive
        engine_kwargs.update(poolclass=StaticPool, connect_args={"check_same_thread": False})

    engine = create_async_engine(db_url, **engine_kwargs)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session_factory(async_engine) -> async_sessionmaker:
    """Create async session factory."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(async_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


# ============================================================================
# EVENT FIXTURES
# ============================================================================


class RecordingPublisher(DomainEventPublisher):
    """Publisher that also keeps every published event."""

    def __init__(self) -> None:
        super().__init__()
        self.published: list[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        self.published.append(event)
        await super().publish(event)


@pytest.fixture
def event_publisher() -> RecordingPublisher:
    """Isolated publisher per test."""
    return RecordingPublisher()


# ============================================================================
# CUSTOMER TEST DATA
# ============================================================================


@pytest.fixture
def sample_address() -> Address:
    return Address.of("742 Evergreen Terrace", "Springfield", "IL", "62704")


@pytest.fixture
def make_customer(sample_address):
    """Factory for new (unsaved) customers."""

    def _make(
        email: str = "homer@example.com",
        name: str = "Homer Simpson",
        credit_limit: int | str = 1000,
        currency: str = "USD",
    ) -> Customer:
        return Customer.create(name, Email(email), sample_address, Money.of(credit_limit, currency))

    return _make


@pytest.fixture
def sample_customer(make_customer) -> Customer:
    """New ACTIVE customer with a 1000 USD limit."""
    return make_customer()
