from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.errors import Unauthorized

# Контекст для хеширования паролей
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt учитывает только первые 72 байта
BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> str:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверка пароля"""
    return pwd_context.verify(_truncate(plain_password), hashed_password)


def get_password_hash(password: str) -> str:
    """Хеширование пароля (соль генерируется для каждого хеша)"""
    return pwd_context.hash(_truncate(password))


def create_access_token(
    data: Dict[str, Any],
    secret: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Создание JWT токена доступа.

    Без ``expires_delta`` токен не содержит exp и действует, пока валидна подпись.
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode["iat"] = int(now.timestamp())

    if expires_delta is not None:
        to_encode["exp"] = int((now + expires_delta).timestamp())

    return jwt.encode(to_encode, secret, algorithm=algorithm)


def verify_token(token: Optional[str], secret: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """Проверка JWT токена и извлечение данных"""
    if not token:
        raise Unauthorized("No token provided", code="no_token")

    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        raise Unauthorized("Invalid token", code="invalid_token")
