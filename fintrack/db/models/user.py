from sqlalchemy import Column, DateTime, String

from fintrack.db.base import BaseModel


class UserModel(BaseModel):
    __tablename__ = "users"

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    activated_at = Column(DateTime, nullable=True)
