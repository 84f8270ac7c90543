"""Контракты репозиториев.

Базовый репозиторий работает с однородной коллекцией сущностей одного типа.
Удаление отсутствующей сущности во всех репозиториях завершается успешно
(идемпотентно), обновление отсутствующей приводит к NotFoundError.
"""
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar
from uuid import UUID

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

E = TypeVar("E", bound=Entity)
T = TypeVar("T", bound=Transaction)


class Repository(ABC, Generic[E]):
    """CRUD над коллекцией сущностей одного типа"""

    @abstractmethod
    async def create(self, entity: E) -> None:
        """Сохранение новой сущности, ConflictError при совпадении идентификатора"""

    @abstractmethod
    async def find_by_id(self, entity_id: UUID) -> Optional[E]:
        """Поиск по идентификатору, None если сущности нет"""

    @abstractmethod
    async def update(self, entity_id: UUID, patch: EntityInput) -> None:
        """Частичное обновление, NotFoundError если сущности нет"""

    @abstractmethod
    async def delete(self, entity_id: UUID) -> None:
        """Удаление, отсутствие сущности не считается ошибкой"""


class UserRepository(Repository[User]):
    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        ...


class SessionRepository(Repository[Session]):
    @abstractmethod
    async def find_by_token(self, token: str) -> Optional[Session]:
        ...

    @abstractmethod
    async def find_many_by_user_id(self, user_id: UUID) -> List[Session]:
        ...


class TransactionCategoryRepository(Repository[TransactionCategory]):
    @abstractmethod
    async def find_by_id_from_user(
        self, user_id: UUID, category_id: UUID
    ) -> Optional[TransactionCategory]:
        """Категория пользователя или общая категория"""

    @abstractmethod
    async def find_many_from_user_of_expenses(self, user_id: UUID) -> List[TransactionCategory]:
        ...

    @abstractmethod
    async def find_many_from_user_of_earnings(self, user_id: UUID) -> List[TransactionCategory]:
        ...


class RecurringTransactionRepository(Repository[T]):
    @abstractmethod
    async def find_many_by_origin_id(self, origin_id: UUID) -> List[T]:
        """Повторения транзакции в порядке дат"""

    @abstractmethod
    async def find_end_of_recurrence(self, origin_id: UUID) -> Optional[T]:
        """Последнее созданное повторение"""


class DebitExpenseTransactionRepository(RecurringTransactionRepository[DebitExpenseTransaction]):
    pass


class TransferenceTransactionRepository(RecurringTransactionRepository[TransferenceTransaction]):
    pass
