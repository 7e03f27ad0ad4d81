import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine for url.

    SQLite (the default, in-memory) shares one connection through StaticPool so every
    session sees the same database, and has foreign key enforcement switched on.
    Other databases get pool_pre_ping / pool_recycle to avoid stale connections.
    """
    if _is_sqlite(url):
        engine = create_async_engine(
            url,
            echo=False,
            future=True,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # noqa: ARG001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_async_engine(
        url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        pool_recycle=300,
    )


class SessionFactory:
    """Opens AsyncSessions on one engine.

    SQLite runs on a single shared connection (StaticPool), so sessions on it are
    handed out one at a time: a second request waits until the first session closes,
    and one request's rollback can never discard another's pending writes.
    """

    def __init__(self, bind: AsyncEngine) -> None:
        self._maker = async_sessionmaker(
            bind=bind,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._lock: Optional[asyncio.Lock] = asyncio.Lock() if bind.dialect.name == "sqlite" else None

    @asynccontextmanager
    async def __call__(self) -> AsyncIterator[AsyncSession]:
        if self._lock is None:
            async with self._maker() as session:
                yield session
            return
        async with self._lock:
            async with self._maker() as session:
                yield session


def build_sessionmaker(bind: AsyncEngine) -> SessionFactory:
    return SessionFactory(bind)


engine = build_engine(settings.database_url)

AsyncSessionLocal = build_sessionmaker(engine)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
