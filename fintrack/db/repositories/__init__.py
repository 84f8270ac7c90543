from fintrack.db.repositories.base import SQLAlchemyRepository
from fintrack.db.repositories.session_repository import SQLAlchemySessionRepository
from fintrack.db.repositories.transaction_category_repository import SQLAlchemyTransactionCategoryRepository
from fintrack.db.repositories.transaction_repository import (
    SQLAlchemyDebitExpenseTransactionRepository,
    SQLAlchemyTransferenceTransactionRepository,
)
from fintrack.db.repositories.user_repository import SQLAlchemyUserRepository

__all__ = [
    "SQLAlchemyRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemySessionRepository",
    "SQLAlchemyTransactionCategoryRepository",
    "SQLAlchemyDebitExpenseTransactionRepository",
    "SQLAlchemyTransferenceTransactionRepository"
]
