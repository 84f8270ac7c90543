from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, func, or_, select

from fintrack.db.models import TransactionCategoryModel
from fintrack.db.repositories.base import SQLAlchemyRepository
from fintrack.domains.entities import TransactionCategory
from fintrack.domains.repositories import TransactionCategoryRepository


class SQLAlchemyTransactionCategoryRepository(
    SQLAlchemyRepository[TransactionCategory], TransactionCategoryRepository
):
    """Репозиторий для работы с категориями транзакций"""

    model = TransactionCategoryModel
    entity = TransactionCategory

    async def find_by_id_from_user(
        self, user_id: UUID, category_id: UUID
    ) -> Optional[TransactionCategory]:
        result = await self.session.execute(
            select(TransactionCategoryModel).where(
                and_(
                    TransactionCategoryModel.id == category_id,
                    self._visible_to(user_id)
                )
            )
        )
        db_category = result.scalar_one_or_none()
        return self._to_domain(db_category) if db_category else None

    async def find_many_from_user_of_expenses(self, user_id: UUID) -> List[TransactionCategory]:
        return await self._find_many_from_user(user_id, is_in_expense=True)

    async def find_many_from_user_of_earnings(self, user_id: UUID) -> List[TransactionCategory]:
        return await self._find_many_from_user(user_id, is_in_expense=False)

    async def _find_many_from_user(self, user_id: UUID, is_in_expense: bool) -> List[TransactionCategory]:
        """Категории пользователя вместе с общими, по имени без учёта регистра"""
        result = await self.session.execute(
            select(TransactionCategoryModel)
            .where(
                and_(
                    TransactionCategoryModel.is_in_expense == is_in_expense,
                    self._visible_to(user_id)
                )
            )
            .order_by(func.lower(TransactionCategoryModel.name))
        )
        return [self._to_domain(db_category) for db_category in result.scalars().all()]

    @staticmethod
    def _visible_to(user_id: UUID):
        return or_(
            TransactionCategoryModel.user_id == user_id,
            TransactionCategoryModel.user_id.is_(None)
        )
