"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- engine / db: fresh SQLite database per test with the schema applied
- photo_storage: local photo storage under tmp_path
- hasher: bcrypt hasher at the minimum cost factor
- mutations / directory: services wired to the fixtures above
- sample_business: business fields used across tests
"""

import os

# Keep the module-level engine off the real data directory
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio

from reviewhub.core.database import build_engine, build_session_maker, init_models
from reviewhub.services.assembler import GraphAssembler
from reviewhub.services.auth import PasswordHasher
from reviewhub.services.directory import BusinessDirectory
from reviewhub.services.mutations import MutationService
from reviewhub.services.storage import LocalPhotoStorage

REVIEW_TEXT = "This should be enough for the minimum limit"


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Engine bound to a new SQLite file with every table created."""
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'database.db'}")
    await init_models(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest_asyncio.fixture
async def db(session_maker):
    """Session for direct service calls."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def photo_storage(tmp_path) -> LocalPhotoStorage:
    return LocalPhotoStorage(tmp_path / "business_photos")


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=8)


@pytest.fixture
def mutations(photo_storage, hasher) -> MutationService:
    return MutationService(photo_storage, hasher)


@pytest.fixture
def directory(mutations) -> BusinessDirectory:
    return BusinessDirectory(GraphAssembler(), mutations)


@pytest.fixture
def sample_business() -> dict:
    """Return a sample business for testing."""
    return {
        "name": "Testing",
        "address": "1234 test st.",
        "city": "testville",
        "state": "TS",
        "postal_code": "53253",
    }
