import logging
from datetime import timedelta
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InvalidCredentials, UserNotFound, ValidationError
from app.core.security import create_access_token, verify_token
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис регистрации и аутентификации пользователей.

    Секрет подписи и алгоритм передаются явно, сервис не читает настройки сам.
    """

    def __init__(
        self,
        session: AsyncSession,
        secret: str,
        algorithm: str = "HS256",
        expires_delta: Optional[timedelta] = None,
    ):
        self.session = session
        self.secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta
        self.user_repository = UserRepository(session)

    async def register(self, username: str, password: str) -> User:
        """Регистрация нового пользователя"""
        if await self.user_repository.username_exists(username):
            logger.info(f"Registration rejected, username taken: {username}")
            raise ValidationError("Username already taken", code="username_taken")

        user = await self.user_repository.create(User.create_user(username, password))
        logger.info(f"User registered: {user.username} ({user.id})")
        return user

    async def login(self, username: str, password: str) -> Tuple[User, str]:
        """Вход пользователя: проверка пароля и выпуск токена"""
        user = await self.user_repository.get_by_username(username)

        if not user:
            raise UserNotFound()

        if not user.authenticate(password):
            logger.info(f"Wrong password for user {username}")
            raise InvalidCredentials()

        token = create_access_token(
            user.token_payload(),
            self.secret,
            algorithm=self.algorithm,
            expires_delta=self.expires_delta,
        )
        logger.info(f"User logged in: {user.username}")
        return user, token

    def current_identity(self, token: Optional[str]) -> Dict[str, Any]:
        """Расшифрованный токен как есть; Unauthorized если токена нет или он невалиден"""
        return verify_token(token, self.secret, self.algorithm)
