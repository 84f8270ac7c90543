import asyncio
import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

# bcrypt учитывает только первые 72 байта пароля
BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher:
    """Хеширование паролей через bcrypt"""

    def __init__(self, rounds: int = 12):
        self._pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    async def hash(self, password: str) -> str:
        """Хеширование пароля"""
        return await asyncio.to_thread(self._pwd_context.hash, self._truncate(password))

    async def match(self, password: str, digest: str) -> bool:
        """Проверка пароля"""
        return await asyncio.to_thread(self._pwd_context.verify, self._truncate(password), digest)

    @staticmethod
    def _truncate(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class SecretsEncryption:
    """Генерация криптостойких токенов"""

    async def generate(self, byte_length: int) -> str:
        return secrets.token_hex(byte_length)


class JWTTokenGenerator:
    """Выпуск и проверка JWT токенов доступа"""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 15):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def generate(
        self,
        subject: str,
        claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Создание JWT токена доступа"""
        to_encode = dict(claims or {})

        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.expire_minutes)

        to_encode.update({"sub": subject, "exp": expire})
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[Dict[str, Any]]:
        """Проверка JWT токена и извлечение данных"""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None

