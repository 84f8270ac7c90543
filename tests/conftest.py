"""
Test configuration and fixtures
"""
from functools import partial

import pytest

from fintrack.core.config import Settings
from fintrack.core.db import create_engine, create_session_factory, init_models
from fintrack.db.unit_of_work import SQLAlchemyUnitOfWork
from fintrack.infrastructure.memory import InMemoryStore, InMemoryUnitOfWork
from tests.fakes import FakeEncryption, FakePasswordHasher


@pytest.fixture
def db_settings(tmp_path):
    """Settings pointing to a SQLite database in a temporary file"""
    return Settings(
        _env_file=None,
        jwt_secret="test-secret",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'fintrack.db'}",
        bcrypt_rounds=4
    )


@pytest.fixture
async def engine(db_settings):
    """Fresh database for each test, foreign keys enforced like on PostgreSQL"""
    engine = create_engine(db_settings)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture(params=["sqlalchemy", "memory"])
def uow_factory(request, session_factory, memory_store):
    """Unit of work factory for each storage backend"""
    if request.param == "sqlalchemy":
        return partial(SQLAlchemyUnitOfWork, session_factory)
    return partial(InMemoryUnitOfWork, memory_store)


@pytest.fixture
def password_hasher():
    return FakePasswordHasher()


@pytest.fixture
def encryption():
    return FakeEncryption()
