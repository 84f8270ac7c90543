"""Сборка зависимостей приложения"""
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from fintrack.core.config import Settings, get_settings
from fintrack.core.db import create_engine, create_session_factory, init_models
from fintrack.core.logging_config import configure_logging
from fintrack.core.security import BcryptPasswordHasher, JWTTokenGenerator, SecretsEncryption
from fintrack.db.unit_of_work import SQLAlchemyUnitOfWork
from fintrack.domains.categories import TransactionCategoryService
from fintrack.domains.gateways import Encryption, PasswordHasher
from fintrack.domains.identity import IdentityService
from fintrack.domains.unit_of_work import UnitOfWork


@dataclass
class Application:
    settings: Settings
    engine: AsyncEngine
    uow_factory: Callable[[], UnitOfWork]
    identity: IdentityService
    categories: TransactionCategoryService

    async def create_tables(self) -> None:
        await init_models(self.engine)

    async def shutdown(self) -> None:
        await self.engine.dispose()


def create_application(
    settings: Optional[Settings] = None,
    password_hasher: Optional[PasswordHasher] = None,
    encryption: Optional[Encryption] = None
) -> Application:
    """Создание приложения; шлюзы можно подменить, например в тестах"""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine = create_engine(settings)
    uow_factory = partial(SQLAlchemyUnitOfWork, create_session_factory(engine))

    identity = IdentityService(
        uow_factory,
        password_hasher=password_hasher or BcryptPasswordHasher(settings.bcrypt_rounds),
        encryption=encryption or SecretsEncryption(),
        token_generator=JWTTokenGenerator(
            settings.jwt_secret,
            settings.jwt_algorithm,
            settings.access_token_expire_minutes
        ),
        session_token_bytes=settings.session_token_bytes
    )

    return Application(
        settings=settings,
        engine=engine,
        uow_factory=uow_factory,
        identity=identity,
        categories=TransactionCategoryService(uow_factory)
    )
