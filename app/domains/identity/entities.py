import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.security import get_password_hash, verify_password


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        id: uuid.UUID,
        username: str,
        password_hash: str,
        created_at: Optional[datetime] = None,
    ):
        self.id = id
        self.username = username
        self.password_hash = password_hash
        self.created_at = created_at or datetime.now(timezone.utc)

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)

    def token_payload(self) -> Dict[str, Any]:
        """Данные, которые попадают в токен сессии"""
        return {"username": self.username, "id": str(self.id)}

    @classmethod
    def create_user(cls, username: str, password: str) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            id=uuid.uuid4(),
            username=username,
            password_hash=get_password_hash(password),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username})"
