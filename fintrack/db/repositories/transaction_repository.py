from typing import List, Optional, TypeVar
from uuid import UUID

from sqlalchemy import select

from fintrack.db.models import DebitExpenseTransactionModel, TransferenceTransactionModel
from fintrack.db.repositories.base import SQLAlchemyRepository
from fintrack.domains.entities import DebitExpenseTransaction, Transaction, TransferenceTransaction
from fintrack.domains.repositories import (
    DebitExpenseTransactionRepository,
    TransferenceTransactionRepository,
)

T = TypeVar("T", bound=Transaction)


class SQLAlchemyRecurringTransactionRepository(SQLAlchemyRepository[T]):
    """Запросы по повторениям, общие для всех видов транзакций"""

    async def find_many_by_origin_id(self, origin_id: UUID) -> List[T]:
        result = await self.session.execute(self._recurrence_query(origin_id))
        return [self._to_domain(db_transaction) for db_transaction in result.scalars().all()]

    async def find_end_of_recurrence(self, origin_id: UUID) -> Optional[T]:
        result = await self.session.execute(
            self._recurrence_query(origin_id, descending=True).limit(1)
        )
        db_transaction = result.scalar_one_or_none()
        return self._to_domain(db_transaction) if db_transaction else None

    def _recurrence_query(self, origin_id: UUID, descending: bool = False):
        order = (self.model.transacted_at, self.model.created_at)
        if descending:
            order = tuple(column.desc() for column in order)
        return select(self.model).where(self.model.origin_id == origin_id).order_by(*order)


class SQLAlchemyDebitExpenseTransactionRepository(
    SQLAlchemyRecurringTransactionRepository[DebitExpenseTransaction],
    DebitExpenseTransactionRepository
):
    """Репозиторий для работы с расходами по дебетовому счёту"""

    model = DebitExpenseTransactionModel
    entity = DebitExpenseTransaction


class SQLAlchemyTransferenceTransactionRepository(
    SQLAlchemyRecurringTransactionRepository[TransferenceTransaction],
    TransferenceTransactionRepository
):
    """Репозиторий для работы с переводами между счетами"""

    model = TransferenceTransactionModel
    entity = TransferenceTransaction
