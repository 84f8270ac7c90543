from pydantic import BaseModel, EmailStr, Field

from fintrack.domains.entities.fields import Name


class UserRegistration(BaseModel):
    """Схема для регистрации пользователя"""
    name: Name
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=60)


class UserLogin(BaseModel):
    """Схема для входа пользователя"""
    email: EmailStr
    password: str


class PasswordChange(BaseModel):
    """Схема для смены пароля"""
    current_password: str
    new_password: str = Field(..., min_length=6, max_length=60)


class ProfileUpdate(BaseModel):
    """Схема для обновления профиля"""
    name: Name


class UserDeletion(BaseModel):
    """Схема для удаления учётной записи"""
    current_password: str
