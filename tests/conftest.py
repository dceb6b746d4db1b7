"""
Test Configuration and Fixtures
Provides shared test setup for all test cases
"""
import os

# Settings are read at import time, so the test environment must be in place first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-marketplace-tests")

import pytest
import pytest_asyncio
import sys
import uuid
from datetime import datetime, timezone
from unittest.mock import patch
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app.database.connection import Base
from app.models.user import User
from app.models.property import Property
from app.models.offer import Offer
from app.utils.security import create_access_token

# Test database URL (use in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Create test engine
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)

# Every module that opens its own session
MODULES_TO_PATCH = [
    'app.services.user_service',
    'app.services.property_service',
    'app.services.admin_service',
    'app.services.offer_service',
    'app.services.wishlist_service',
    'app.services.review_service',
    'app.services.dashboard_service',
    'app.database.connection',
]


@pytest_asyncio.fixture(scope="function")
async def db_session():
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session):
    """Create test HTTP client"""
    # Services open `async with AsyncSessionLocal()`; hand them the test session instead
    class TestSessionContext:
        def __init__(self, session):
            self.session = session
        async def __aenter__(self):
            return self.session
        async def __aexit__(self, *args):
            pass

    def make_test_session_local(session):
        return lambda: TestSessionContext(session)

    patches = []
    for module_name in MODULES_TO_PATCH:
        if module_name in sys.modules:
            module = sys.modules[module_name]
            if hasattr(module, 'AsyncSessionLocal'):
                patches.append(patch.object(module, 'AsyncSessionLocal', make_test_session_local(db_session)))

    for p in patches:
        p.start()

    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        for p in patches:
            p.stop()


@pytest.fixture
def auth_headers():
    """Bearer header for an email, signed with the test secret"""
    def _headers(email: str) -> dict:
        token = create_access_token(data={"email": email})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def user_factory(db_session):
    """Insert a user directly into the store"""
    async def _create(role: str = "user", email: str = None, status: str = "active", **fields) -> User:
        user = User(
            id=str(uuid.uuid4()),
            email=(email or f"{role}_{uuid.uuid4().hex[:10]}@example.com").lower(),
            name=fields.pop("name", f"Test {role.title()}"),
            role=role,
            status=status,
            **fields,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user
    return _create


@pytest.fixture
def property_factory(db_session):
    """Insert a property owned by the given agent email"""
    async def _create(agent_email: str, **fields) -> Property:
        prop = Property(
            id=str(uuid.uuid4()),
            title=fields.pop("title", "Lakeside Villa"),
            location=fields.pop("location", "Dhaka"),
            min_price=fields.pop("min_price", 100.0),
            max_price=fields.pop("max_price", 200.0),
            agent_name=fields.pop("agent_name", "Test Agent"),
            agent_email=agent_email,
            verification_status=fields.pop("verification_status", "verified"),
            advertised=fields.pop("advertised", False),
            **fields,
        )
        db_session.add(prop)
        await db_session.commit()
        await db_session.refresh(prop)
        return prop
    return _create


@pytest.fixture
def offer_factory(db_session):
    """Insert an offer on a property for the given buyer"""
    async def _create(prop: Property, buyer_email: str, **fields) -> Offer:
        offer = Offer(
            id=str(uuid.uuid4()),
            property_id=prop.id,
            property_title=prop.title,
            property_location=prop.location,
            agent_name=prop.agent_name,
            agent_email=prop.agent_email,
            buyer_email=buyer_email,
            buyer_name=fields.pop("buyer_name", "Test Buyer"),
            offer_amount=fields.pop("offer_amount", 150.0),
            buying_date=fields.pop("buying_date", "2026-12-01"),
            status=fields.pop("status", "pending"),
            created_at=fields.pop("created_at", datetime.now(timezone.utc)),
            **fields,
        )
        db_session.add(offer)
        await db_session.commit()
        await db_session.refresh(offer)
        return offer
    return _create


async def _sign_in(client: AsyncClient, user: User) -> dict:
    resp = await client.post("/jwt", json={"email": user.email, "name": user.name})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest_asyncio.fixture(scope="function")
async def authenticated_user(client: AsyncClient, user_factory):
    """Create a buyer and sign in through /jwt"""
    user = await user_factory(role="user")
    headers = await _sign_in(client, user)
    return client, user, headers


@pytest_asyncio.fixture(scope="function")
async def authenticated_agent(client: AsyncClient, user_factory):
    """Create an agent and sign in through /jwt"""
    agent = await user_factory(role="agent", photo_url="https://img.example.com/agent.png")
    headers = await _sign_in(client, agent)
    return client, agent, headers


@pytest_asyncio.fixture(scope="function")
async def authenticated_admin(client: AsyncClient, user_factory):
    """Create an admin and sign in through /jwt"""
    admin = await user_factory(role="admin", email="admin@example.com")
    headers = await _sign_in(client, admin)
    return client, admin, headers
