import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Dict, TypeVar

from fintrack.core.errors import TransactionStateError
from fintrack.domains.repositories import (
    DebitExpenseTransactionRepository,
    Repository,
    SessionRepository,
    TransactionCategoryRepository,
    TransferenceTransactionRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnitOfWork(ABC):
    """Граница транзакции над несколькими репозиториями.

    Состояния: idle -> begin() -> active -> commit() | rollback() -> idle.
    Вложенный begin() и commit()/rollback() вне транзакции - ошибка
    программиста (TransactionStateError). Репозитории доступны только
    в активном состоянии.

    Реализации открывают ресурс в _open(), фиксируют в _commit()
    (сбой фиксации поднимается как CommitFailedError), откатывают
    в _rollback() и обязаны освободить ресурс в _close().
    """

    def __init__(self):
        self._active = False
        self._repositories: Dict[str, Repository] = {}

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def users(self) -> UserRepository:
        return self._repository("users")

    @property
    def sessions(self) -> SessionRepository:
        return self._repository("sessions")

    @property
    def transaction_categories(self) -> TransactionCategoryRepository:
        return self._repository("transaction_categories")

    @property
    def debit_expense_transactions(self) -> DebitExpenseTransactionRepository:
        return self._repository("debit_expense_transactions")

    @property
    def transference_transactions(self) -> TransferenceTransactionRepository:
        return self._repository("transference_transactions")

    def _repository(self, name: str) -> Repository:
        if not self._active:
            raise TransactionStateError("Repositories are available only inside an active unit of work")
        return self._repositories[name]

    @abstractmethod
    async def _open(self) -> Dict[str, Repository]:
        ...

    @abstractmethod
    async def _commit(self) -> None:
        ...

    @abstractmethod
    async def _rollback(self) -> None:
        ...

    @abstractmethod
    async def _close(self) -> None:
        ...

    async def begin(self) -> None:
        """Начало транзакции"""
        if self._active:
            raise TransactionStateError("Unit of work is already active")
        self._repositories = await self._open()
        self._active = True
        logger.debug(f"Unit of work {id(self):#x} began")

    async def commit(self) -> None:
        """Фиксация транзакции"""
        self._ensure_active("commit")
        try:
            await self._commit()
            logger.debug(f"Unit of work {id(self):#x} committed")
        finally:
            await self._release()

    async def rollback(self) -> None:
        """Откат транзакции"""
        self._ensure_active("rollback")
        try:
            await self._rollback()
            logger.debug(f"Unit of work {id(self):#x} rolled back")
        finally:
            await self._release()

    async def transaction(self, work: Callable[[], Awaitable[T]]) -> T:
        """Выполнение work в одной транзакции: commit при успехе, rollback при ошибке"""
        async with self:
            return await work()

    async def __aenter__(self) -> "UnitOfWork":
        await self.begin()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if not self._active:
            # транзакция уже закрыта явным commit()/rollback() внутри блока
            return False
        if exc_type is None:
            await self.commit()
            return False

        try:
            await self.rollback()
        except Exception:
            # наружу уходит исходная ошибка work
            logger.exception(f"Unit of work {id(self):#x} failed to roll back")
        return False

    def _ensure_active(self, operation: str) -> None:
        if not self._active:
            raise TransactionStateError(f"Cannot {operation}: unit of work is not active")

    async def _release(self) -> None:
        self._active = False
        self._repositories = {}
        await self._close()
