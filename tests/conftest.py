import asyncio
import sys
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Ensure project root is on sys.path so `import fintrack` works when running pytest from root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fintrack.db import base as db_base  # noqa: E402
from fintrack.db.models import SmsTransaction  # noqa: E402,F401
from tests.fixtures.sample_messages import FIXED_NOW  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_engine(tmp_path_factory):
    """Point the app at a throwaway SQLite file for the whole session.

    NullPool gives every session its own connection, so sessions opened from
    different event loops (pytest-asyncio, TestClient) never share one.
    """
    db_path = tmp_path_factory.mktemp("db") / "fintrack_test.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)

    async def _create_all():
        async with engine.begin() as conn:
            await conn.run_sync(db_base.Base.metadata.create_all)

    asyncio.run(_create_all())

    original_engine, original_factory = db_base.engine, db_base.AsyncSessionLocal
    db_base.engine = engine
    db_base.AsyncSessionLocal = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield engine
    db_base.engine, db_base.AsyncSessionLocal = original_engine, original_factory


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same instant."""
    return lambda: FIXED_NOW
