from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declarative_base

# Базовый класс для моделей
Base = declarative_base()


class BaseModel(Base):
    """Общие колонки: идентификатор выдаёт домен, а не база"""
    __abstract__ = True

    id = Column(Uuid(as_uuid=True), primary_key=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)
