import copy
import logging
from typing import Callable, ClassVar, Dict, List, Optional, Type, TypeVar
from uuid import UUID

from fintrack.core.errors import ConflictError, NotFoundError
from fintrack.domains.entities import (
    DebitExpenseTransaction,
    Entity,
    Session,
    Transaction,
    TransactionCategory,
    TransferenceTransaction,
    User,
)
from fintrack.domains.entities.base import EntityInput
from fintrack.domains.repositories import (
    DebitExpenseTransactionRepository,
    Repository,
    SessionRepository,
    TransactionCategoryRepository,
    TransferenceTransactionRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)
T = TypeVar("T", bound=Transaction)


class InMemoryRepository(Repository[E]):
    """CRUD над словарём снимков; наружу отдаются только копии"""

    entity: ClassVar[Type[Entity]]

    def __init__(self, items: Dict[UUID, E]):
        self.items = items

    async def create(self, entity: E) -> None:
        if entity.id in self.items:
            logger.warning(f"{self.entity.resource} {entity.id} already exists")
            raise ConflictError(self.entity.resource)
        self._check_unique(entity)
        self.items[entity.id] = copy.deepcopy(entity)

    async def find_by_id(self, entity_id: UUID) -> Optional[E]:
        return self._find_one(lambda item: item.id == entity_id)

    async def update(self, entity_id: UUID, patch: EntityInput) -> None:
        values = self.entity.validate_patch(patch)
        stored = self.items.get(entity_id)
        if stored is None:
            raise NotFoundError(self.entity.resource)
        if not values:
            return

        entity = copy.deepcopy(stored)
        entity.update(values)
        self._check_unique(entity)
        self.items[entity_id] = entity

    async def delete(self, entity_id: UUID) -> None:
        self.items.pop(entity_id, None)

    def _check_unique(self, entity: E) -> None:
        """Аналог уникальных индексов базы"""

    def _find_one(self, predicate: Callable[[E], bool]) -> Optional[E]:
        for item in self.items.values():
            if predicate(item):
                return copy.deepcopy(item)
        return None

    def _find_many(self, predicate: Callable[[E], bool]) -> List[E]:
        return [copy.deepcopy(item) for item in self.items.values() if predicate(item)]


class InMemoryUserRepository(InMemoryRepository[User], UserRepository):
    entity = User

    async def find_by_email(self, email: str) -> Optional[User]:
        return self._find_one(lambda user: user.email == email)

    def _check_unique(self, entity: User) -> None:
        for user in self.items.values():
            if user.id != entity.id and user.email == entity.email:
                raise ConflictError(self.entity.resource)


class InMemorySessionRepository(InMemoryRepository[Session], SessionRepository):
    entity = Session

    async def find_by_token(self, token: str) -> Optional[Session]:
        return self._find_one(lambda session: session.token == token)

    async def find_many_by_user_id(self, user_id: UUID) -> List[Session]:
        sessions = self._find_many(lambda session: session.user_id == user_id)
        return sorted(sessions, key=lambda session: session.created_at, reverse=True)

    def _check_unique(self, entity: Session) -> None:
        for session in self.items.values():
            if session.id != entity.id and session.token == entity.token:
                raise ConflictError(self.entity.resource)


class InMemoryTransactionCategoryRepository(
    InMemoryRepository[TransactionCategory], TransactionCategoryRepository
):
    entity = TransactionCategory

    async def find_by_id_from_user(
        self, user_id: UUID, category_id: UUID
    ) -> Optional[TransactionCategory]:
        return self._find_one(
            lambda category: category.id == category_id and category.is_visible_to(user_id)
        )

    async def find_many_from_user_of_expenses(self, user_id: UUID) -> List[TransactionCategory]:
        return self._find_many_from_user(user_id, is_in_expense=True)

    async def find_many_from_user_of_earnings(self, user_id: UUID) -> List[TransactionCategory]:
        return self._find_many_from_user(user_id, is_in_expense=False)

    def _find_many_from_user(self, user_id: UUID, is_in_expense: bool) -> List[TransactionCategory]:
        categories = self._find_many(
            lambda category: category.is_in_expense == is_in_expense and category.is_visible_to(user_id)
        )
        return sorted(categories, key=lambda category: category.name.lower())


class InMemoryRecurringTransactionRepository(InMemoryRepository[T]):
    async def find_many_by_origin_id(self, origin_id: UUID) -> List[T]:
        transactions = self._find_many(lambda transaction: transaction.origin_id == origin_id)
        return sorted(transactions, key=lambda transaction: (transaction.transacted_at, transaction.created_at))

    async def find_end_of_recurrence(self, origin_id: UUID) -> Optional[T]:
        transactions = await self.find_many_by_origin_id(origin_id)
        return transactions[-1] if transactions else None


class InMemoryDebitExpenseTransactionRepository(
    InMemoryRecurringTransactionRepository[DebitExpenseTransaction],
    DebitExpenseTransactionRepository
):
    entity = DebitExpenseTransaction


class InMemoryTransferenceTransactionRepository(
    InMemoryRecurringTransactionRepository[TransferenceTransaction],
    TransferenceTransactionRepository
):
    entity = TransferenceTransaction
