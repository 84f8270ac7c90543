import logging
from typing import Any, Callable, Dict, Optional, Union
from uuid import UUID

from fintrack.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    NewPasswordSameAsCurrentError,
    NotFoundError,
    UnauthorizedError,
)
from fintrack.domains.entities import Session, User
from fintrack.domains.entities.base import parse_schema
from fintrack.domains.gateways import Encryption, PasswordHasher, TokenGenerator
from fintrack.domains.identity.schemas import (
    PasswordChange,
    ProfileUpdate,
    UserDeletion,
    UserLogin,
    UserRegistration,
)
from fintrack.domains.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

SESSION_TOKEN_BYTES = 64


class IdentityService:
    """Сервис регистрации, аутентификации и сессий пользователей"""

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        password_hasher: PasswordHasher,
        encryption: Encryption,
        token_generator: Optional[TokenGenerator] = None,
        session_token_bytes: int = SESSION_TOKEN_BYTES
    ):
        self.uow_factory = uow_factory
        self.password_hasher = password_hasher
        self.encryption = encryption
        self.token_generator = token_generator
        self.session_token_bytes = session_token_bytes

    async def register_user(self, data: Union[UserRegistration, dict]) -> User:
        """Регистрация нового пользователя"""
        registration = parse_schema(UserRegistration, data)
        password_hash = await self.password_hasher.hash(registration.password)
        user = User.create({
            "name": registration.name,
            "email": registration.email,
            "password_hash": password_hash
        })

        async with self.uow_factory() as uow:
            if await uow.users.find_by_email(user.email):
                raise ConflictError(User.resource)
            await uow.users.create(user)

        logger.info(f"User {user.id} registered")
        return user

    async def authenticate(self, data: Union[UserLogin, dict]) -> Session:
        """Вход пользователя и создание сессии"""
        login = parse_schema(UserLogin, data)

        async with self.uow_factory() as uow:
            user = await uow.users.find_by_email(login.email)
            if not user or not await self.password_hasher.match(login.password, user.password_hash):
                raise InvalidCredentialsError()

            token = await self.encryption.generate(self.session_token_bytes)
            session = Session.create({"user_id": user.id, "token": token})
            await uow.sessions.create(session)

        logger.info(f"User {user.id} signed in")
        return session

    async def get_user_by_session_token(self, token: str) -> User:
        """Пользователь по действующему токену сессии"""
        async with self.uow_factory() as uow:
            session = await uow.sessions.find_by_token(token)
            if not session or session.is_expired:
                raise UnauthorizedError()

            user = await uow.users.find_by_id(session.user_id)
            if not user:
                raise UnauthorizedError()

        return user

    async def renew_session(self, token: str) -> Session:
        """Продление действующей сессии"""
        async with self.uow_factory() as uow:
            session = await uow.sessions.find_by_token(token)
            if not session or session.is_expired:
                raise UnauthorizedError()

            await uow.sessions.update(session.id, session.renew())

        return session

    async def revoke_session(self, token: str) -> None:
        """Выход: сессия перестаёт действовать"""
        async with self.uow_factory() as uow:
            session = await uow.sessions.find_by_token(token)
            if not session:
                raise NotFoundError(Session.resource)

            await uow.sessions.update(session.id, session.revoke())

    async def change_password(self, user_id: UUID, data: Union[PasswordChange, dict]) -> None:
        """Смена пароля пользователя"""
        change = parse_schema(PasswordChange, data)

        async with self.uow_factory() as uow:
            user = await uow.users.find_by_id(user_id)
            if not user:
                raise NotFoundError(User.resource)

            if not await self.password_hasher.match(change.current_password, user.password_hash):
                raise InvalidCredentialsError()
            if change.new_password == change.current_password:
                raise NewPasswordSameAsCurrentError()

            password_hash = await self.password_hasher.hash(change.new_password)
            await uow.users.update(user.id, {"password_hash": password_hash})

    async def get_user_profile(self, user_id: UUID) -> Dict[str, Any]:
        """Профиль пользователя без хеша пароля"""
        async with self.uow_factory() as uow:
            user = await uow.users.find_by_id(user_id)

        if not user:
            raise NotFoundError(User.resource)
        return user.serialized

    async def update_user(self, user_id: UUID, data: Union[ProfileUpdate, dict]) -> Dict[str, Any]:
        """Обновление профиля пользователя"""
        profile = parse_schema(ProfileUpdate, data)

        async with self.uow_factory() as uow:
            await uow.users.update(user_id, profile.model_dump(exclude_unset=True))
            user = await uow.users.find_by_id(user_id)

        return user.serialized

    async def delete_user(self, user_id: UUID, data: Union[UserDeletion, dict]) -> None:
        """Удаление учётной записи вместе с её сессиями"""
        deletion = parse_schema(UserDeletion, data)

        async with self.uow_factory() as uow:
            user = await uow.users.find_by_id(user_id)
            if not user:
                raise NotFoundError(User.resource)

            if not await self.password_hasher.match(deletion.current_password, user.password_hash):
                raise InvalidCredentialsError()

            for session in await uow.sessions.find_many_by_user_id(user.id):
                await uow.sessions.delete(session.id)
            await uow.users.delete(user.id)

        logger.info(f"User {user_id} deleted")

    async def activate_user(self, user_id: UUID) -> User:
        """Активация учётной записи"""
        async with self.uow_factory() as uow:
            user = await uow.users.find_by_id(user_id)
            if not user:
                raise NotFoundError(User.resource)

            changes = user.activate()
            if changes:
                await uow.users.update(user.id, changes)

        return user

    def issue_access_token(self, user: User) -> str:
        """JWT токен доступа для пользователя"""
        if self.token_generator is None:
            raise RuntimeError("Token generator is not configured")
        return self.token_generator.generate(str(user.id), {"email": user.email})
