from fintrack.infrastructure.memory.store import InMemoryStore
from fintrack.infrastructure.memory.unit_of_work import InMemoryUnitOfWork

__all__ = ["InMemoryStore", "InMemoryUnitOfWork"]
