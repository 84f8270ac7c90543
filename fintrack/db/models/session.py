from sqlalchemy import Column, DateTime, String, Uuid

from fintrack.db.base import BaseModel


class SessionModel(BaseModel):
    __tablename__ = "sessions"

    # без внешнего ключа: удаление пользователя не затрагивает другие таблицы
    user_id = Column(Uuid(as_uuid=True), index=True, nullable=False)
    token = Column(String(255), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)
