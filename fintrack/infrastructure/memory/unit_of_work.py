from typing import Dict, Optional

from fintrack.core.errors import CommitFailedError
from fintrack.domains.repositories import Repository
from fintrack.domains.unit_of_work import UnitOfWork
from fintrack.infrastructure.memory.repositories import (
    InMemoryDebitExpenseTransactionRepository,
    InMemorySessionRepository,
    InMemoryTransactionCategoryRepository,
    InMemoryTransferenceTransactionRepository,
    InMemoryUserRepository,
)
from fintrack.infrastructure.memory.store import Collections, InMemoryStore


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of work над InMemoryStore.

    Транзакция работает с собственной копией коллекций и публикует её
    в хранилище при commit. Изоляция сериализуемая: блокировка хранилища
    держится всё время активной транзакции.
    """

    def __init__(self, store: InMemoryStore):
        super().__init__()
        self.store = store
        self._working: Optional[Collections] = None
        self._locked = False

    async def _open(self) -> Dict[str, Repository]:
        await self.store.lock.acquire()
        try:
            self._working = self.store.snapshot()
        except BaseException:
            self.store.lock.release()
            raise
        self._locked = True

        return {
            "users": InMemoryUserRepository(self._working["users"]),
            "sessions": InMemorySessionRepository(self._working["sessions"]),
            "transaction_categories": InMemoryTransactionCategoryRepository(
                self._working["transaction_categories"]
            ),
            "debit_expense_transactions": InMemoryDebitExpenseTransactionRepository(
                self._working["debit_expense_transactions"]
            ),
            "transference_transactions": InMemoryTransferenceTransactionRepository(
                self._working["transference_transactions"]
            ),
        }

    async def _commit(self) -> None:
        try:
            self.store.publish(self._working)
        except Exception as exc:
            raise CommitFailedError(str(exc)) from exc

    async def _rollback(self) -> None:
        self._working = None

    async def _close(self) -> None:
        self._working = None
        if self._locked:
            self._locked = False
            self.store.lock.release()
