"""
Engine and session plumbing.

``make_engine`` builds an async engine for any URL the app runs against.
PostgreSQL enforces the comment foreign keys on its own; SQLite only does
so once ``PRAGMA foreign_keys`` is switched on for each new connection, so
SQLite engines get a connect hook that does it.  Without that, deleting a
listing or article would leave its comments behind.

``session_scope`` is the request unit of work: commit when the handler
returns, roll back when it raises.  ``get_db`` is that scope over the
production session factory; tests swap in their own factory.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str, **kwargs) -> AsyncEngine:
    engine = create_async_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Handlers serialize rows after commit; keep loaded attributes usable.
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def session_scope(factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


engine = make_engine(settings.DATABASE_URL, echo=settings.DEBUG, pool_pre_ping=True)
async_session = make_session_factory(engine)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    async with session_scope(async_session) as session:
        yield session
