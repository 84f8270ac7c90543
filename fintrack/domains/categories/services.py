import logging
from typing import Callable, List
from uuid import UUID

from fintrack.core.errors import ForbiddenActionError, NotFoundError
from fintrack.domains.entities import TransactionCategory
from fintrack.domains.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class TransactionCategoryService:
    """Сервис для работы с категориями транзакций пользователя"""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self.uow_factory = uow_factory

    async def create_category(self, user_id: UUID, name: str, is_in_expense: bool) -> TransactionCategory:
        """Создание личной категории пользователя"""
        category = TransactionCategory.create({
            "user_id": user_id,
            "name": name,
            "is_in_expense": is_in_expense
        })

        async with self.uow_factory() as uow:
            await uow.transaction_categories.create(category)

        logger.info(f"Category {category.id} created for user {user_id}")
        return category

    async def list_expense_categories(self, user_id: UUID) -> List[TransactionCategory]:
        async with self.uow_factory() as uow:
            return await uow.transaction_categories.find_many_from_user_of_expenses(user_id)

    async def list_earning_categories(self, user_id: UUID) -> List[TransactionCategory]:
        async with self.uow_factory() as uow:
            return await uow.transaction_categories.find_many_from_user_of_earnings(user_id)

    async def rename_category(self, user_id: UUID, category_id: UUID, name: str) -> TransactionCategory:
        """Переименование категории, общие категории менять нельзя"""
        async with self.uow_factory() as uow:
            category = await self._get_owned(uow, user_id, category_id)
            await uow.transaction_categories.update(category.id, {"name": name})
            return await uow.transaction_categories.find_by_id(category.id)

    async def delete_category(self, user_id: UUID, category_id: UUID) -> None:
        """Удаление категории пользователя"""
        async with self.uow_factory() as uow:
            category = await self._get_owned(uow, user_id, category_id)
            await uow.transaction_categories.delete(category.id)

        logger.info(f"Category {category_id} deleted by user {user_id}")

    async def _get_owned(self, uow: UnitOfWork, user_id: UUID, category_id: UUID) -> TransactionCategory:
        category = await uow.transaction_categories.find_by_id_from_user(user_id, category_id)
        if not category:
            raise NotFoundError(TransactionCategory.resource)
        if category.is_global:
            raise ForbiddenActionError("Global categories cannot be changed")
        return category
