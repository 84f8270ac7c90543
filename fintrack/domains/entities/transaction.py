from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Literal, Optional
from uuid import UUID

from pydantic import Field, PositiveInt, model_validator

from fintrack.core.errors import TransactionAlreadyAccomplishedError, ValidationError
from fintrack.domains.entities.base import Entity, EntityCreate, EntityInput, EntityUpdate
from fintrack.domains.entities.fields import Description, TransactedDate

RecurrencePeriod = Literal["day", "week", "month", "year"]


class TransactionCreate(EntityCreate):
    """Общие поля создания транзакции"""
    transacted_at: TransactedDate
    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    description: Description
    origin_id: Optional[UUID] = None
    is_accomplished: bool = False
    recurrence_period: Optional[RecurrencePeriod] = None
    recurrence_amount: Optional[PositiveInt] = None
    recurrence_limit: Optional[PositiveInt] = None

    @model_validator(mode="after")
    def default_recurrence_amount(self):
        if self.recurrence_period and not self.recurrence_amount:
            self.recurrence_amount = 1
        return self


class TransactionUpdate(EntityUpdate):
    transacted_at: TransactedDate = None
    amount: Decimal = Field(None, gt=0, max_digits=14, decimal_places=2)
    description: Description = None
    is_accomplished: bool = None
    recurrence_period: Optional[RecurrencePeriod] = None
    recurrence_amount: Optional[PositiveInt] = None
    recurrence_limit: Optional[PositiveInt] = None


class Transaction(Entity):
    """Базовая финансовая транзакция"""

    resource = "transaction"
    fields = (
        "origin_id",
        "transacted_at",
        "is_accomplished",
        "amount",
        "recurrence_period",
        "recurrence_amount",
        "recurrence_limit",
        "description",
    )

    def __init__(
        self,
        id: UUID,
        transacted_at: date,
        amount: Decimal,
        description: str,
        origin_id: Optional[UUID] = None,
        is_accomplished: bool = False,
        recurrence_period: Optional[str] = None,
        recurrence_amount: Optional[int] = None,
        recurrence_limit: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        super().__init__(id, created_at, updated_at)
        self.origin_id = origin_id
        self.transacted_at = transacted_at
        self.is_accomplished = is_accomplished
        self.amount = amount
        self.recurrence_period = recurrence_period
        self.recurrence_amount = recurrence_amount
        self.recurrence_limit = recurrence_limit
        self.description = description

    @property
    def is_recurring(self) -> bool:
        return self.recurrence_period is not None

    def accomplish(self) -> Dict[str, Any]:
        """Отметка транзакции как оплаченной"""
        if self.is_accomplished:
            raise TransactionAlreadyAccomplishedError()
        return self.update({"is_accomplished": True})

    def _after_update(self, changed: Dict[str, Any]) -> Dict[str, Any]:
        if self.recurrence_period and not self.recurrence_amount:
            self.recurrence_amount = 1
            return {"recurrence_amount": 1}
        return {}


class DebitExpenseTransactionCreate(TransactionCreate):
    category_id: UUID
    bank_account_id: UUID


class DebitExpenseTransactionUpdate(TransactionUpdate):
    category_id: UUID = None
    bank_account_id: UUID = None


class DebitExpenseTransaction(Transaction):
    """Расход, списанный с банковского счёта"""

    resource = "debit expense transaction"
    fields = Transaction.fields + ("category_id", "bank_account_id")
    create_schema = DebitExpenseTransactionCreate
    update_schema = DebitExpenseTransactionUpdate

    def __init__(self, id: UUID, category_id: UUID, bank_account_id: UUID, **kwargs):
        super().__init__(id, **kwargs)
        self.category_id = category_id
        self.bank_account_id = bank_account_id


class TransferenceTransactionCreate(TransactionCreate):
    origin_bank_account_id: UUID
    destiny_bank_account_id: UUID

    @model_validator(mode="after")
    def check_distinct_accounts(self):
        if self.origin_bank_account_id == self.destiny_bank_account_id:
            raise ValueError("Origin and destiny bank accounts must differ")
        return self


class TransferenceTransactionUpdate(TransactionUpdate):
    origin_bank_account_id: UUID = None
    destiny_bank_account_id: UUID = None


class TransferenceTransaction(Transaction):
    """Перевод между банковскими счетами пользователя"""

    resource = "transference transaction"
    fields = Transaction.fields + ("origin_bank_account_id", "destiny_bank_account_id")
    create_schema = TransferenceTransactionCreate
    update_schema = TransferenceTransactionUpdate

    def __init__(
        self,
        id: UUID,
        origin_bank_account_id: UUID,
        destiny_bank_account_id: UUID,
        **kwargs
    ):
        super().__init__(id, **kwargs)
        self.origin_bank_account_id = origin_bank_account_id
        self.destiny_bank_account_id = destiny_bank_account_id

    def update(self, patch: EntityInput) -> Dict[str, Any]:
        values = self.validate_patch(patch)
        origin = values.get("origin_bank_account_id", self.origin_bank_account_id)
        destiny = values.get("destiny_bank_account_id", self.destiny_bank_account_id)
        if origin == destiny:
            raise ValidationError({"destiny_bank_account_id": "must differ from origin"})
        return super().update(values)
