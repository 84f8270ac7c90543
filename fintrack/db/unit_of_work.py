import logging
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fintrack.core.errors import CommitFailedError
from fintrack.db.repositories import (
    SQLAlchemyDebitExpenseTransactionRepository,
    SQLAlchemySessionRepository,
    SQLAlchemyTransactionCategoryRepository,
    SQLAlchemyTransferenceTransactionRepository,
    SQLAlchemyUserRepository,
)
from fintrack.domains.repositories import Repository
from fintrack.domains.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Unit of work поверх одной сессии SQLAlchemy.

    Каждая активная транзакция получает собственную сессию и соединение из
    пула. Изоляция параллельных транзакций обеспечивается базой (для
    PostgreSQL по умолчанию READ COMMITTED), а update блокирует изменяемую
    строку через SELECT ... FOR UPDATE.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__()
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    async def _open(self) -> Dict[str, Repository]:
        session = self._session_factory()
        try:
            await session.begin()
        except BaseException:
            await session.close()
            raise
        self._session = session

        return {
            "users": SQLAlchemyUserRepository(session),
            "sessions": SQLAlchemySessionRepository(session),
            "transaction_categories": SQLAlchemyTransactionCategoryRepository(session),
            "debit_expense_transactions": SQLAlchemyDebitExpenseTransactionRepository(session),
            "transference_transactions": SQLAlchemyTransferenceTransactionRepository(session),
        }

    async def _commit(self) -> None:
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            logger.error(f"Commit failed, outcome in the database is unknown: {exc}")
            raise CommitFailedError(str(exc)) from exc

    async def _rollback(self) -> None:
        await self._session.rollback()

    async def _close(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            # close() откатывает всё, что не было зафиксировано
            await session.close()
