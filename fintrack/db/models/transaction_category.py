from sqlalchemy import Boolean, Column, String, Uuid

from fintrack.db.base import BaseModel


class TransactionCategoryModel(BaseModel):
    __tablename__ = "transaction_categories"

    # NULL - общая категория для всех пользователей
    user_id = Column(Uuid(as_uuid=True), index=True, nullable=True)
    is_in_expense = Column(Boolean, nullable=False)
    name = Column(String(255), nullable=False)
