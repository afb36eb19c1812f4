import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit, session_rollback

logger = logging.getLogger(__name__)


class TransactionManager:
    """
    Utility class for running a unit of work as one database transaction
    with rollback on any error.
    """

    # Isolation level for dialects that support per-transaction settings.
    # Together with conditional UPDATEs this keeps stock decrements race-free.
    ISOLATION_LEVEL = "READ COMMITTED"

    # Transactions slower than this are logged as warnings
    SLOW_TRANSACTION_SECONDS = 5

    @staticmethod
    @asynccontextmanager
    async def atomic(session: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager committing the session's work on success and rolling
        it back on any exception, which is re-raised.

        When the session has not started a transaction yet:
        - non-SQLite dialects pin the connection to READ COMMITTED
        - SQLite opens with BEGIN IMMEDIATE, taking the write lock up front
          so concurrent writers queue on the busy timeout instead of
          failing with "database is locked" at their first write

        Usage:
            async with TransactionManager.atomic(session):
                await OrderRepository.create(order_dto, session)
                ...
        """
        bind = session.bind
        if bind is not None and not session.in_transaction():
            if bind.dialect.name == "sqlite":
                await session.execute(text("BEGIN IMMEDIATE"))
            else:
                await session.connection(
                    execution_options={"isolation_level": TransactionManager.ISOLATION_LEVEL}
                )

        transaction_start = datetime.now()
        logger.debug(f"Transaction started at {transaction_start}")

        try:
            yield session
            await session_commit(session)
        except Exception as e:
            try:
                await session_rollback(session)
                logger.info(f"Transaction rolled back due to error: {type(e).__name__}")
            except Exception as rollback_error:
                logger.critical(f"Failed to rollback transaction: {str(rollback_error)}")
            raise

        duration = (datetime.now() - transaction_start).total_seconds()
        if duration > TransactionManager.SLOW_TRANSACTION_SECONDS:
            logger.warning(f"Slow transaction: {duration:.2f}s")
        else:
            logger.debug(f"Transaction committed successfully in {duration:.2f}s")
