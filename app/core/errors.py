from http import HTTPStatus
from typing import Any, Dict, Optional


class AppError(Exception):
    """Базовая ошибка приложения с HTTP-статусом и кодом"""

    code = "app_error"
    status = HTTPStatus.BAD_REQUEST
    message = "Application error"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        self.message = message or self.message
        self.code = code or self.code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "detail": self.message}


class ValidationError(AppError):
    code = "validation_error"
    status = HTTPStatus.BAD_REQUEST
    message = "Invalid input"


class InvalidCredentials(AppError):
    code = "invalid_credentials"
    status = HTTPStatus.BAD_REQUEST
    message = "Wrong credentials"


class Unauthorized(AppError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    message = "Not authenticated"


class Forbidden(AppError):
    code = "forbidden"
    status = HTTPStatus.FORBIDDEN
    message = "Access denied"


class NotFound(AppError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Resource not found"


class InternalError(AppError):
    code = "internal_error"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Internal server error"


class UserNotFound(NotFound):
    """Неизвестное имя при входе отдаётся как 400, как и неверный пароль"""
    code = "user_not_found"
    status = HTTPStatus.BAD_REQUEST
    message = "User not found"
