"""Интерфейсы внешних возможностей, которые реализует инфраструктура"""
from datetime import timedelta
from typing import Any, Dict, Optional, Protocol


class PasswordHasher(Protocol):
    async def hash(self, password: str) -> str:
        ...

    async def match(self, password: str, digest: str) -> bool:
        ...


class Encryption(Protocol):
    async def generate(self, byte_length: int) -> str:
        """Непредсказуемая строка длиной 2 * byte_length символов"""
        ...


class TokenGenerator(Protocol):
    def generate(
        self, subject: str, claims: Optional[Dict[str, Any]] = None, expires_delta: Optional[timedelta] = None
    ) -> str:
        ...

    def verify(self, token: str) -> Optional[Dict[str, Any]]:
        ...
