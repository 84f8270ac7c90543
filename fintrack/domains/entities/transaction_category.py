from datetime import datetime
from typing import Optional
from uuid import UUID

from fintrack.domains.entities.base import Entity, EntityCreate, EntityUpdate
from fintrack.domains.entities.fields import Name


class TransactionCategoryCreate(EntityCreate):
    name: Name
    is_in_expense: bool
    # категория без владельца общая для всех пользователей
    user_id: Optional[UUID] = None


class TransactionCategoryUpdate(EntityUpdate):
    name: Name = None


class TransactionCategory(Entity):
    """Категория транзакций (расходов или доходов)"""

    resource = "transaction category"
    fields = ("user_id", "is_in_expense", "name")
    create_schema = TransactionCategoryCreate
    update_schema = TransactionCategoryUpdate

    def __init__(
        self,
        id: UUID,
        name: str,
        is_in_expense: bool,
        user_id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        super().__init__(id, created_at, updated_at)
        self.user_id = user_id
        self.is_in_expense = is_in_expense
        self.name = name

    @property
    def is_global(self) -> bool:
        return self.user_id is None

    def is_visible_to(self, user_id: UUID) -> bool:
        return self.is_global or self.user_id == user_id

    def __repr__(self) -> str:
        return f"TransactionCategory(id={self.id}, name={self.name})"
