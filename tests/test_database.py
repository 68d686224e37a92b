"""
Engine and unit-of-work plumbing from app.database.
"""
import pytest
from sqlalchemy import func, select, text

from app.database import session_scope
from app.models import Listing


async def _count_listings(factory) -> int:
    async with factory() as session:
        return await session.scalar(select(func.count()).select_from(Listing))


@pytest.mark.asyncio
async def test_sqlite_engine_enforces_foreign_keys(test_engine):
    async with test_engine.connect() as conn:
        assert (await conn.execute(text("PRAGMA foreign_keys"))).scalar() == 1


@pytest.mark.asyncio
async def test_session_scope_commits_on_success(session_factory):
    async with session_scope(session_factory) as session:
        session.add(Listing(name="Kept", description="committed row", price=1))

    assert await _count_listings(session_factory) == 1


@pytest.mark.asyncio
async def test_session_scope_rolls_back_on_error(session_factory):
    with pytest.raises(RuntimeError):
        async with session_scope(session_factory) as session:
            session.add(Listing(name="Lost", description="rolled back", price=1))
            await session.flush()
            raise RuntimeError("handler failed")

    assert await _count_listings(session_factory) == 0
