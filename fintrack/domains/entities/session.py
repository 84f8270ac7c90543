from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import Field

from fintrack.domains.entities.base import Entity, EntityCreate, EntityUpdate
from fintrack.domains.entities.fields import UtcDateTime

SESSION_DURATION = timedelta(days=3)


class SessionCreate(EntityCreate):
    user_id: UUID
    token: str = Field(..., min_length=64)


class SessionUpdate(EntityUpdate):
    expires_at: UtcDateTime = None


class Session(Entity):
    """Сессия пользователя с непрозрачным токеном"""

    resource = "session"
    fields = ("user_id", "token", "expires_at")
    create_schema = SessionCreate
    update_schema = SessionUpdate

    def __init__(
        self,
        id: UUID,
        user_id: UUID,
        token: str,
        expires_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        super().__init__(id, created_at, updated_at)
        self.user_id = user_id
        self.token = token
        self.expires_at = expires_at or self.created_at + SESSION_DURATION

    @property
    def is_expired(self) -> bool:
        return self.expires_at <= datetime.utcnow()

    def renew(self) -> Dict[str, Any]:
        """Продление сессии на полный срок"""
        return self.update({"expires_at": datetime.utcnow() + SESSION_DURATION})

    def revoke(self) -> Dict[str, Any]:
        """Отзыв сессии: срок действия истекает немедленно"""
        return self.update({"expires_at": datetime.utcnow()})
