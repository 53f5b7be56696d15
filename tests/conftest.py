"""
Journey Planner - Test Configuration and Fixtures
"""
import os
from collections.abc import AsyncIterator

# Set testing environment before the application reads its settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEFAULT_NEW_USER_PASSWORD"] = "Welcome123!"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from journey_planner.db import get_session  # noqa: E402
from journey_planner.main import app  # noqa: E402
from journey_planner.models import JourneyPlan, User, UserRole  # noqa: E402
from journey_planner.services.auth.security import create_session_token, hash_password  # noqa: E402
from journey_planner.services.journey_plans import JourneyPlanService, JourneyPlanTable  # noqa: E402
from journey_planner.utils.retry import ConflictRetryConfig  # noqa: E402

ADMIN_PASSWORD = "adminpassword123"
USER_PASSWORD = "userpassword123"

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Create a fresh in-memory database for each test"""
    # StaticPool keeps the single in-memory connection alive for the whole test
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()

    await test_engine.dispose()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Create test client with database override"""

    async def override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def retry_config() -> ConflictRetryConfig:
    """Conflict retries without backoff sleeps"""
    return ConflictRetryConfig(max_attempts=3, max_wait=0)


@pytest.fixture
def journey_plans(db_session: AsyncSession, retry_config: ConflictRetryConfig) -> JourneyPlanService:
    return JourneyPlanService(db_session, retry_config)


@pytest.fixture
def store_plans(db_session: AsyncSession):
    """Insert plans with fixed numbers, bypassing the counter"""

    async def _store(*numbers: int) -> None:
        table = JourneyPlanTable(db_session)
        for number in numbers:
            await table.insert(JourneyPlan(journey_plan_number=number, driver_name=f"Driver {number}"))

    return _store


async def _create_user(session: AsyncSession, username: str, password: str, role: UserRole) -> User:
    user = User(
        username=username,
        password_hash=hash_password(password),
        full_name=username.title(),
        role=role,
        must_change_password=False,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Create an admin test user"""
    return await _create_user(db_session, "admin", ADMIN_PASSWORD, UserRole.ADMIN)


@pytest.fixture
async def regular_user(db_session: AsyncSession) -> User:
    """Create a regular test user"""
    return await _create_user(db_session, "driverdesk", USER_PASSWORD, UserRole.USER)


@pytest.fixture
def auth_headers(regular_user: User) -> dict[str, str]:
    """Generate authentication headers for the regular user"""
    return {"Authorization": f"Bearer {create_session_token(regular_user)}"}


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict[str, str]:
    """Generate authentication headers for the admin user"""
    return {"Authorization": f"Bearer {create_session_token(admin_user)}"}
