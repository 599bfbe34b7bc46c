"""
Integration test fixtures: the FastAPI app served in-process through httpx,
with its database session and directory pointed at the per-test fixtures.
"""

import httpx
import pytest_asyncio

from reviewhub.core.database import get_db
from reviewhub.core.dependencies import get_directory
from reviewhub.main import create_app


@pytest_asyncio.fixture
async def client(session_maker, directory):
    """AsyncClient against a fresh app instance."""
    app = create_app()

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_directory] = lambda: directory

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client
