from sqlalchemy import Boolean, Column, Date, Integer, Numeric, String, Uuid

from fintrack.db.base import BaseModel


class TransactionColumnsMixin:
    """Колонки, общие для всех видов транзакций"""

    origin_id = Column(Uuid(as_uuid=True), index=True, nullable=True)
    transacted_at = Column(Date, nullable=False)
    is_accomplished = Column(Boolean, nullable=False, default=False)
    amount = Column(Numeric(14, 2), nullable=False)
    recurrence_period = Column(String(5), nullable=True)
    recurrence_amount = Column(Integer, nullable=True)
    recurrence_limit = Column(Integer, nullable=True)
    description = Column(String(255), nullable=False)


class DebitExpenseTransactionModel(TransactionColumnsMixin, BaseModel):
    __tablename__ = "debit_expense_transactions"

    # ссылки на другие коллекции хранятся без внешних ключей
    category_id = Column(Uuid(as_uuid=True), index=True, nullable=False)
    bank_account_id = Column(Uuid(as_uuid=True), index=True, nullable=False)


class TransferenceTransactionModel(TransactionColumnsMixin, BaseModel):
    __tablename__ = "transference_transactions"

    origin_bank_account_id = Column(Uuid(as_uuid=True), index=True, nullable=False)
    destiny_bank_account_id = Column(Uuid(as_uuid=True), index=True, nullable=False)
