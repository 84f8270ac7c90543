import logging
from typing import Any, ClassVar, Dict, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.errors import ConflictError, NotFoundError
from fintrack.db.base import BaseModel
from fintrack.domains.entities import Entity
from fintrack.domains.entities.base import EntityInput
from fintrack.domains.repositories import Repository

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class SQLAlchemyRepository(Repository[E]):
    """Общая реализация CRUD поверх сессии SQLAlchemy.

    Репозиторий не фиксирует транзакцию сам: изменения отправляются в базу
    через flush, а commit/rollback остаются за unit of work, которому
    принадлежит сессия.
    """

    model: ClassVar[Type[BaseModel]]
    entity: ClassVar[Type[Entity]]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entity: E) -> None:
        """Сохранение новой сущности"""
        if await self.session.get(self.model, entity.id) is not None:
            logger.warning(f"{self.entity.resource} {entity.id} already exists")
            raise ConflictError(self.entity.resource)

        try:
            # SAVEPOINT: конфликт откатывает только эту запись, транзакция продолжается
            async with self.session.begin_nested():
                self.session.add(self._to_model(entity))
                await self.session.flush()
        except IntegrityError as exc:
            logger.warning(f"{self.entity.resource} {entity.id} violates a unique constraint")
            raise ConflictError(self.entity.resource) from exc

    async def find_by_id(self, entity_id: UUID) -> Optional[E]:
        """Получение сущности по идентификатору"""
        db_entity = await self.session.get(self.model, entity_id)
        return self._to_domain(db_entity) if db_entity else None

    async def update(self, entity_id: UUID, patch: EntityInput) -> None:
        """Частичное обновление сущности"""
        values = self.entity.validate_patch(patch)

        # строка блокируется до конца транзакции, параллельные патчи идут по очереди
        result = await self.session.execute(
            select(self.model).where(self.model.id == entity_id).with_for_update()
        )
        db_entity = result.scalar_one_or_none()
        if db_entity is None:
            raise NotFoundError(self.entity.resource)
        if not values:
            return

        entity = self._to_domain(db_entity)
        entity.update(values)
        try:
            async with self.session.begin_nested():
                self._apply(db_entity, entity)
                await self.session.flush()
        except IntegrityError as exc:
            logger.warning(f"{self.entity.resource} {entity_id} violates a unique constraint")
            raise ConflictError(self.entity.resource) from exc

    async def delete(self, entity_id: UUID) -> None:
        """Удаление сущности, отсутствие строки не считается ошибкой"""
        await self.session.execute(delete(self.model).where(self.model.id == entity_id))

    def _to_domain(self, db_entity: BaseModel) -> E:
        """Преобразование модели БД в доменную сущность"""
        return self.entity(**self._columns(db_entity))

    def _to_model(self, entity: E) -> BaseModel:
        """Преобразование доменной сущности в модель БД"""
        return self.model(**entity.to_dict())

    def _apply(self, db_entity: BaseModel, entity: E) -> None:
        for name, value in entity.to_dict().items():
            if name != "id":
                setattr(db_entity, name, value)

    def _columns(self, db_entity: BaseModel) -> Dict[str, Any]:
        names = ("id", "created_at", "updated_at") + self.entity.fields
        return {name: getattr(db_entity, name) for name in names}
