"""Unit of Work pattern for managing database transactions."""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.db import base as db_base
from fintrack.db.models import SmsTransaction
from fintrack.db.repositories import SmsTransactionRepository


class UnitOfWork:
    """
    Unit of Work pattern implementation for managing database transactions.

    All repositories inside one context share the same session and
    transaction.

    Usage:
        async with UnitOfWork() as uow:
            row = await uow.transactions.save_record(user_id, record)
            await uow.commit()
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        """
        Initialize Unit of Work.

        Args:
            session: Optional existing session (useful for testing)
        """
        self._session = session
        self._owned_session = session is None

        # Repositories (initialized in __aenter__)
        self.transactions: SmsTransactionRepository = None  # type: ignore

    async def __aenter__(self):
        """Enter async context manager."""
        if self._owned_session:
            self._session = db_base.AsyncSessionLocal()

        assert self._session is not None, "Session must be initialized"
        self.transactions = SmsTransactionRepository(SmsTransaction, self._session)

        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager."""
        if exc_type is not None:
            await self.rollback()
        elif self._owned_session:
            await self.commit()

        if self._owned_session and self._session:
            await self._session.close()

    async def commit(self):
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self):
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()
