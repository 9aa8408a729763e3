from pydantic import BaseModel, ConfigDict, Field, field_validator
import uuid


class UserCredentials(BaseModel):
    """Имя пользователя и пароль из тела запроса"""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        if not v.strip():
            raise ValueError('Username cannot be empty')
        return v.strip()


class UserCreate(UserCredentials):
    """Схема для регистрации пользователя"""
    pass


class UserLogin(UserCredentials):
    """Схема для входа пользователя"""
    pass


class UserResponse(BaseModel):
    """Публичные данные пользователя (без хеша пароля)"""
    id: uuid.UUID
    username: str

    model_config = ConfigDict(from_attributes=True)


class TokenData(BaseModel):
    """Данные из JWT токена"""
    id: uuid.UUID
    username: str

    model_config = ConfigDict(extra="allow")
