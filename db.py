from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator
import logging

from sqlalchemy import event, Engine, Result, CursorResult
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine

import config
from models.base import Base

"""
Imports of these models are needed to correctly create tables in the database.
For more information see https://stackoverflow.com/questions/7478403/sqlalchemy-classes-across-files
"""
from models.user import User
from models.product import Product
from models.cartItem import CartItem
from models.favoriteItem import FavoriteItem
from models.contact_message import ContactMessage
from models.order import Order
from models.orderItem import OrderItem

logger = logging.getLogger(__name__)

# SQL echo stays off; SQLAlchemy loggers are silenced in utils/logging_config.py
sql_echo = False


def build_engine(url: str) -> AsyncEngine:
    return create_async_engine(url, echo=sql_echo)


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


url = config.DB_URL
engine = build_engine(url)
session_maker = build_session_maker(engine)


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def session_execute(stmt, session: AsyncSession) -> Result[Any] | CursorResult[Any]:
    return await session.execute(stmt)


async def session_flush(session: AsyncSession) -> None:
    await session.flush()


async def session_commit(session: AsyncSession) -> None:
    await session.commit()


async def session_rollback(session: AsyncSession) -> None:
    await session.rollback()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    # Only SQLite needs foreign keys switched on per connection
    if "sqlite" not in type(dbapi_connection).__module__:
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _ensure_sqlite_folder(db_url: str) -> None:
    parsed = make_url(db_url)
    if parsed.get_backend_name() != "sqlite" or not parsed.database or parsed.database == ":memory:":
        return
    data_folder = Path(parsed.database).parent
    if data_folder.exists() is False:
        data_folder.mkdir(parents=True)


async def create_db_and_tables(bind: AsyncEngine | None = None) -> None:
    bind = bind or engine
    _ensure_sqlite_folder(str(bind.url))
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"[DB] Tables ready ({len(Base.metadata.tables)} tables)")
