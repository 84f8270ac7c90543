from typing import Optional

from sqlalchemy import select

from fintrack.db.models import UserModel
from fintrack.db.repositories.base import SQLAlchemyRepository
from fintrack.domains.entities import User
from fintrack.domains.repositories import UserRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """Репозиторий для работы с пользователями"""

    model = UserModel
    entity = User

    async def find_by_email(self, email: str) -> Optional[User]:
        """Получение пользователя по email"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None
