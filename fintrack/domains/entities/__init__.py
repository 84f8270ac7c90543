from fintrack.domains.entities.base import Entity, EntityCreate, EntityUpdate
from fintrack.domains.entities.session import SESSION_DURATION, Session, SessionCreate, SessionUpdate
from fintrack.domains.entities.transaction import (
    DebitExpenseTransaction,
    DebitExpenseTransactionCreate,
    DebitExpenseTransactionUpdate,
    Transaction,
    TransferenceTransaction,
    TransferenceTransactionCreate,
    TransferenceTransactionUpdate,
)
from fintrack.domains.entities.transaction_category import (
    TransactionCategory,
    TransactionCategoryCreate,
    TransactionCategoryUpdate,
)
from fintrack.domains.entities.user import User, UserCreate, UserUpdate

__all__ = [
    "Entity", "EntityCreate", "EntityUpdate",
    "User", "UserCreate", "UserUpdate",
    "Session", "SessionCreate", "SessionUpdate", "SESSION_DURATION",
    "TransactionCategory", "TransactionCategoryCreate", "TransactionCategoryUpdate",
    "Transaction",
    "DebitExpenseTransaction", "DebitExpenseTransactionCreate", "DebitExpenseTransactionUpdate",
    "TransferenceTransaction", "TransferenceTransactionCreate", "TransferenceTransactionUpdate",
]
