from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from fintrack.domains.entities.base import Entity, EntityCreate, EntityUpdate
from fintrack.domains.entities.fields import Name, UtcDateTime


class UserCreate(EntityCreate):
    """Схема для создания пользователя"""
    name: Name
    email: EmailStr
    password_hash: str = Field(..., min_length=6, max_length=255)


class UserUpdate(EntityUpdate):
    """Схема для обновления пользователя"""
    name: Name = None
    email: EmailStr = None
    password_hash: str = Field(None, min_length=6, max_length=255)
    activated_at: Optional[UtcDateTime] = None


class User(Entity):
    """Пользователь"""

    resource = "user"
    fields = ("name", "email", "password_hash", "activated_at")
    create_schema = UserCreate
    update_schema = UserUpdate

    def __init__(
        self,
        id: UUID,
        name: str,
        email: str,
        password_hash: str,
        activated_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        super().__init__(id, created_at, updated_at)
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.activated_at = activated_at

    @property
    def is_activated(self) -> bool:
        return self.activated_at is not None

    def activate(self) -> Dict[str, Any]:
        """Активация учётной записи"""
        if self.is_activated:
            return {}
        return self.update({"activated_at": datetime.utcnow()})

    @property
    def serialized(self) -> Dict[str, Any]:
        """Данные пользователя без хеша пароля"""
        data = self.to_dict()
        data.pop("password_hash")
        return data

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email})"
