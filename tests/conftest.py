"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os

import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis, FakeServer
from httpx import ASGITransport, AsyncClient

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Configure the environment before config.py is imported anywhere
os.environ["RUNTIME_ENVIRONMENT"] = "TEST"
os.environ["DB_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["SESSION_COOKIE_SECURE"] = "false"
os.environ.setdefault("LOG_MASK_SECRETS", "true")

from db import build_engine, build_session_maker, create_db_and_tables, session_commit
from models.product import ProductDTO
from models.user import SessionUser
from repositories.product import ProductRepository
from services.auth import AuthService
from services.session_store import SessionStore

SEED_PRODUCTS = [
    ProductDTO(name="Classic White Tee", price=19.99, image_url="images/white-tee.jpg", category="T-Shirts", stock=10),
    ProductDTO(name="Denim Jacket", price=79.0, image_url="images/denim-jacket.jpg", category="Jackets", stock=2),
    ProductDTO(name="Wool Beanie", price=14.5, image_url=None, category="Accessories", stock=1),
    ProductDTO(name="Chino Trousers", price=49.0, image_url="images/chinos.jpg", category="Trousers", stock=0),
]


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """
    File-backed SQLite database per test.

    A file (not :memory:) so that separate sessions get separate
    connections, which the concurrency tests rely on.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}")
    await create_db_and_tables(engine)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest.fixture
def test_session_maker(test_engine):
    return build_session_maker(test_engine)


@pytest_asyncio.fixture
async def test_session(test_session_maker):
    """Create test database session."""
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def products(test_session_maker) -> dict[str, ProductDTO]:
    """Seeded catalogue, keyed by product name."""
    async with test_session_maker() as session:
        await ProductRepository.bulk_create(SEED_PRODUCTS, session)
        await session_commit(session)
        stored = await ProductRepository.get_all(session)
    return {product.name: product for product in stored}


@pytest_asyncio.fixture
async def user(test_session_maker) -> SessionUser:
    """Registered user 'alice' (password 'wonderland')."""
    async with test_session_maker() as session:
        user_id = await AuthService.register("alice", "alice@example.com", "wonderland", session)
    return SessionUser(id=user_id, username="alice")


# ============================================================================
# Redis Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def redis_client():
    """Create fake Redis client for testing (no real Redis server needed)."""
    client = FakeAsyncRedis(server=FakeServer(), decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def session_store(redis_client) -> SessionStore:
    return SessionStore(redis_client, ttl_seconds=3600)


# ============================================================================
# API Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def api_client(test_session_maker, session_store):
    """
    HTTP client talking to the FastAPI app in-process.

    The database and session store dependencies are swapped for the test
    ones; the app lifespan is not run.
    """
    from app import app
    from web.dependencies import get_db, get_session_store

    async def override_get_db():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: session_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()
