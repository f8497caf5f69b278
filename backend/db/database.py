from collections.abc import AsyncGenerator
from pathlib import Path

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def _ensure_sqlite_parent_dir(database_url: str) -> None:
    # sqlite+aiosqlite:///relative/path.db or sqlite+aiosqlite:////abs/path.db
    if not database_url.startswith("sqlite"):
        return
    _, _, path = database_url.partition(":///")
    if path in ("", ":memory:"):
        return
    Path(path).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


class Database:
    """Owns the async engine and session factory for one application instance."""

    def __init__(self, database_url: str, echo: bool = False):
        _ensure_sqlite_parent_dir(database_url)
        self.url = database_url
        self.engine: AsyncEngine = create_async_engine(database_url, echo=echo)
        if database_url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _sqlite_on_connect)
        self.session_maker = async_sessionmaker(self.engine, expire_on_commit=False)

    async def create_all(self) -> None:
        # Importing the models registers their tables on Base.metadata
        from . import sweet, users  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    def session(self) -> AsyncSession:
        return self.session_maker()

    async def dispose(self) -> None:
        await self.engine.dispose()


def _sqlite_on_connect(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    # Wait for competing writers instead of failing with "database is locked"
    cursor.execute("PRAGMA busy_timeout = 5000")
    cursor.close()


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.db.session() as session:
        yield session
