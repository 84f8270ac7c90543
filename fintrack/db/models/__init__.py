from fintrack.db.base import Base
from fintrack.db.models.session import SessionModel
from fintrack.db.models.transaction import DebitExpenseTransactionModel, TransferenceTransactionModel
from fintrack.db.models.transaction_category import TransactionCategoryModel
from fintrack.db.models.user import UserModel

__all__ = [
    "Base",
    "UserModel",
    "SessionModel",
    "TransactionCategoryModel",
    "DebitExpenseTransactionModel",
    "TransferenceTransactionModel",
]
