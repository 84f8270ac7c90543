from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from fintrack.core.config import Settings, get_settings
from fintrack.db.base import Base


def create_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Асинхронный движок по настройкам приложения"""
    settings = settings or get_settings()
    engine = create_async_engine(settings.database_url, future=True, echo=settings.database_echo)
    if engine.dialect.name == "sqlite":
        _configure_sqlite(engine)
    return engine


def _configure_sqlite(engine: AsyncEngine) -> None:
    """Транзакции и SAVEPOINT под управлением SQLAlchemy, а не драйвера sqlite3"""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        # драйвер больше не открывает и не фиксирует транзакции сам
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def on_begin(conn):
        # IMMEDIATE сразу берёт блокировку записи, параллельные транзакции ждут очереди
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # сущности отдаются наружу и после commit, поэтому без expire
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    """Создание таблиц для разработки и тестов, миграции вне этого модуля"""
    import fintrack.db.models  # noqa: F401  регистрирует модели в Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
