import logging
import shutil
import tempfile
from pathlib import Path
from typing import Annotated, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.db.base import AbstractSQLModel

logger = logging.getLogger(__name__)


def _is_memory_sqlite(url) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class Database:
    """
    Owns the engine and session factory for one application instance.

    In-memory SQLite URLs are backed by a private database file in a temporary
    directory that is removed on dispose. Every session gets its own pooled
    connection, so one session's commit or rollback never touches another's
    open transaction.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = make_url(url)
        self._tmp_dir = None
        if _is_memory_sqlite(self.url):
            self._tmp_dir = tempfile.mkdtemp(prefix="parking-")
            self.url = self.url.set(database=str(Path(self._tmp_dir) / "parking.db"))

        engine_kwargs = {"echo": echo}
        if self.url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"timeout": 30}
        self.engine = create_async_engine(self.url, **engine_kwargs)
        if self.url.get_backend_name() == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _set_sqlite_pragmas)

        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def create_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(AbstractSQLModel.metadata.create_all)
        logger.info("Database schema created on %s", self.url.render_as_string())

    async def dispose(self):
        await self.engine.dispose()
        if self._tmp_dir:
            shutil.rmtree(self._tmp_dir, ignore_errors=True)
            self._tmp_dir = None


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    database: Database = request.app.state.db
    async with database.session_factory() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_db)]
