from typing import Any, Optional


class DomainError(Exception):
    """Базовая ошибка предметной области"""

    def __init__(self, message: str, debug: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.debug = debug

    @property
    def error(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        """Сериализация ошибки для внешнего слоя"""
        return {"error": self.error, "message": self.message, "debug": self.debug}


class ConflictError(DomainError):
    """Сущность с таким идентификатором уже существует"""

    def __init__(self, resource: str):
        super().__init__(f"{resource.capitalize()} already exists")
        self.resource = resource


class NotFoundError(DomainError):
    """Сущность не найдена"""

    def __init__(self, resource: str):
        super().__init__(f"{resource.capitalize()} not found")
        self.resource = resource


class CommitFailedError(DomainError):
    """Фиксация транзакции не удалась, итоговое состояние хранилища неизвестно"""

    def __init__(self, debug: Optional[Any] = None):
        super().__init__("Failed to commit the unit of work", debug)


class ValidationError(DomainError):
    """Входные данные сущности не прошли валидацию"""

    def __init__(self, debug: Optional[Any] = None):
        super().__init__("Received data is invalid", debug)


class InvalidCredentialsError(DomainError):
    def __init__(self):
        super().__init__("Invalid credentials")


class UnauthorizedError(DomainError):
    def __init__(self):
        super().__init__("Unauthorized")


class ForbiddenActionError(DomainError):
    def __init__(self, message: str = "Action denied"):
        super().__init__(message)


class NewPasswordSameAsCurrentError(DomainError):
    def __init__(self):
        super().__init__("New password must differ from the current one")


class TransactionAlreadyAccomplishedError(DomainError):
    def __init__(self):
        super().__init__("Transaction has already been accomplished")


class TransactionStateError(RuntimeError):
    """Нарушение жизненного цикла unit of work (ошибка программиста)"""
