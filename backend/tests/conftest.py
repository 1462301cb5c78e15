"""
FEAF Dashboard - Test Configuration and Fixtures
"""
import os
import uuid
from typing import AsyncGenerator, Awaitable, Callable, Dict, Optional
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['CACHE_ENABLED'] = 'false'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_FILE'] = ''

from app.main import app
from app.core.database import Base, get_db
from app.models.user import User
from app.core.security import get_password_hash, create_access_token

fake = Faker()

TEST_PASSWORD = 'testpassword123'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        # One session per request, as in production
        async with TestSessionLocal() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(db_session: AsyncSession, is_active: bool = True) -> User:
    user = User(
        email=fake.unique.email().lower(),
        hashed_password=get_password_hash(TEST_PASSWORD),
        name=fake.name(),
        is_active=is_active,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def _headers_for(user: User) -> Dict[str, str]:
    token = create_access_token({'sub': str(user.id), 'email': user.email})
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user"""
    return await _create_user(db_session)


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second user who owns nothing of test_user's"""
    return await _create_user(db_session)


@pytest.fixture
async def inactive_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, is_active=False)


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user"""
    return _headers_for(test_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    return _headers_for(other_user)


BoardFactory = Callable[..., Awaitable[dict]]
ComponentFactory = Callable[..., Awaitable[dict]]


@pytest.fixture
def create_board(client: AsyncClient, auth_headers: dict) -> BoardFactory:
    """POST a board and return its JSON body"""
    async def _create(
        reference_model: str = 'PRM',
        name: Optional[str] = None,
        description: Optional[str] = None,
        headers: Optional[dict] = None,
    ) -> dict:
        payload = {
            'name': name or f'{reference_model} board {uuid.uuid4().hex[:6]}',
            'referenceModel': reference_model,
        }
        if description is not None:
            payload['description'] = description
        response = await client.post('/api/v1/boards', json=payload, headers=headers or auth_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def create_component(client: AsyncClient, auth_headers: dict) -> ComponentFactory:
    """POST a component onto a board and return its JSON body"""
    async def _create(
        board_id: str,
        component_type: str,
        name: Optional[str] = None,
        headers: Optional[dict] = None,
        **extra
    ) -> dict:
        payload = {'name': name or fake.word().title(), 'type': component_type, **extra}
        response = await client.post(
            f'/api/v1/boards/{board_id}/components',
            json=payload,
            headers=headers or auth_headers
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _create
