from app.domains.identity.entities import User
from app.domains.identity.schemas import (
    UserCredentials, UserCreate, UserLogin, UserResponse, TokenData
)

__all__ = [
    "User",
    "UserCredentials", "UserCreate", "UserLogin", "UserResponse", "TokenData",
]
