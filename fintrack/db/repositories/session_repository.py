from typing import List, Optional
from uuid import UUID

from sqlalchemy import select

from fintrack.db.models import SessionModel
from fintrack.db.repositories.base import SQLAlchemyRepository
from fintrack.domains.entities import Session
from fintrack.domains.repositories import SessionRepository


class SQLAlchemySessionRepository(SQLAlchemyRepository[Session], SessionRepository):
    """Репозиторий для работы с сессиями пользователей"""

    model = SessionModel
    entity = Session

    async def find_by_token(self, token: str) -> Optional[Session]:
        """Получение сессии по токену"""
        result = await self.session.execute(
            select(SessionModel).where(SessionModel.token == token)
        )
        db_session = result.scalar_one_or_none()
        return self._to_domain(db_session) if db_session else None

    async def find_many_by_user_id(self, user_id: UUID) -> List[Session]:
        """Все сессии пользователя, новые первыми"""
        result = await self.session.execute(
            select(SessionModel)
            .where(SessionModel.user_id == user_id)
            .order_by(SessionModel.created_at.desc())
        )
        return [self._to_domain(db_session) for db_session in result.scalars().all()]
