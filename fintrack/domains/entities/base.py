from datetime import datetime
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type, TypeVar, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from fintrack.core.errors import ValidationError

E = TypeVar("E", bound="Entity")

EntityInput = Union[BaseModel, Mapping[str, Any]]


class EntityCreate(BaseModel):
    """Минимальный набор полей для создания сущности"""

    model_config = ConfigDict(extra="forbid")


class EntityUpdate(BaseModel):
    """Частичное обновление: отсутствующие поля остаются без изменений"""

    model_config = ConfigDict(extra="forbid")


def parse_schema(schema: Type[BaseModel], data: EntityInput) -> BaseModel:
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(exc.errors(include_url=False)) from exc


class Entity:
    """Доменная сущность с неизменяемым идентификатором.

    Идентификатор выдаётся один раз при создании на стороне домена, поэтому
    на сущность можно ссылаться ещё до сохранения в хранилище. Равенство
    определяется только идентификатором.
    """

    resource: ClassVar[str] = "entity"
    # поля полезной нагрузки, без id и отметок времени
    fields: ClassVar[Tuple[str, ...]] = ()
    create_schema: ClassVar[Type[EntityCreate]] = EntityCreate
    update_schema: ClassVar[Type[EntityUpdate]] = EntityUpdate

    def __init__(
        self,
        id: UUID,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at

    @property
    def id(self) -> UUID:
        return self._id

    @classmethod
    def create(cls: Type[E], data: EntityInput) -> E:
        """Создание новой сущности с валидацией и значениями по умолчанию"""
        values = parse_schema(cls.create_schema, data).model_dump()
        return cls(id=uuid4(), **values)

    @classmethod
    def validate_patch(cls, patch: EntityInput) -> Dict[str, Any]:
        """Проверка частичного обновления, возвращает только переданные поля"""
        return parse_schema(cls.update_schema, patch).model_dump(exclude_unset=True)

    def update(self, patch: EntityInput) -> Dict[str, Any]:
        """Применение частичного обновления, возвращает изменившиеся поля"""
        values = self.validate_patch(patch)
        if not values:
            return {}

        changed = {
            name: value for name, value in values.items() if getattr(self, name) != value
        }
        for name, value in changed.items():
            setattr(self, name, value)

        changed.update(self._after_update(changed))
        self.updated_at = datetime.utcnow()
        return changed

    def _after_update(self, changed: Dict[str, Any]) -> Dict[str, Any]:
        """Хук для полей, зависящих от других полей"""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Снимок сущности для сохранения и сериализации"""
        data = {"id": self.id}
        data.update({name: getattr(self, name) for name in self.fields})
        data["created_at"] = self.created_at
        data["updated_at"] = self.updated_at
        return data

    def __eq__(self, other) -> bool:
        if not isinstance(other, Entity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"
