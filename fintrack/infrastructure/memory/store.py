import asyncio
import copy
from typing import Dict
from uuid import UUID

from fintrack.domains.entities import Entity

Collections = Dict[str, Dict[UUID, Entity]]

COLLECTIONS = (
    "users",
    "sessions",
    "transaction_categories",
    "debit_expense_transactions",
    "transference_transactions",
)


class InMemoryStore:
    """Хранилище снимков сущностей в памяти процесса.

    Блокировка удерживается активной транзакцией от begin до commit или
    rollback, поэтому транзакции над одним хранилищем выполняются строго
    последовательно.
    """

    def __init__(self):
        self.collections: Collections = {name: {} for name in COLLECTIONS}
        self.lock = asyncio.Lock()

    def snapshot(self) -> Collections:
        return copy.deepcopy(self.collections)

    def publish(self, collections: Collections) -> None:
        self.collections = collections
