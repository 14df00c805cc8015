"""
Shared pytest fixtures and configuration for all tests
"""
import os
import tempfile
from typing import List
from unittest.mock import AsyncMock, Mock

# Settings are read at import time, so the test environment must be in place
# before anything from roomcraft is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["OPENAI_API_KEY"] = ""
os.environ["SESSION_BACKEND"] = "memory"
os.environ.setdefault("SEED_SAMPLE_DATA", "false")
os.environ.setdefault("LOG_FORMAT", "console")
os.environ.setdefault("UPLOAD_PATH", os.path.join(tempfile.gettempdir(), "roomcraft-test-uploads"))

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from roomcraft.database.models import Base  # noqa: E402
from roomcraft.schemas.products import Product  # noqa: E402
from tests.factories import make_product  # noqa: E402


@pytest.fixture
async def db_session():
    """Fresh in-memory database with the schema created, one per test"""
    # StaticPool keeps the single in-memory connection alive across sessions
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def mock_openai_client():
    """Mock OpenAI client for testing without API calls"""
    mock = Mock()
    mock.chat = Mock()
    mock.chat.completions = Mock()
    mock.chat.completions.create = AsyncMock()
    return mock


@pytest.fixture
def modern_catalog() -> List[Product]:
    """Twenty modern furniture products priced 110..300"""
    return [make_product(f"Modern Piece {i}", price=100 + i * 10) for i in range(1, 21)]


@pytest.fixture
def sample_catalog() -> List[Product]:
    """A small mixed catalog"""
    return [
        make_product("Modern Sofa", 899.99, "furniture", ["modern", "minimal"]),
        make_product("Rustic Coffee Table", 299.99, "furniture", ["rustic", "wood"]),
        make_product("Ceramic Floor Tiles", 4.99, "tiles", ["modern", "ceramic"]),
        make_product("Minimalist Chair", 199.99, "furniture", ["minimal", "modern"]),
        make_product("Wooden Bookshelf", 449.99, "furniture", ["rustic", "wood", "traditional"]),
        make_product("Marble Tiles", 12.99, "tiles", ["luxury", "marble"]),
        make_product("Decorative Vase", 49.99, "decor", ["modern", "ceramic"]),
        make_product("Wall Art Print", 79.99, "decor", ["modern", "minimal"]),
    ]
