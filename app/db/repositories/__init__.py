from app.db.repositories.user_repository import UserRepository
from app.db.repositories.post_repository import PostRepository

__all__ = [
    "UserRepository",
    "PostRepository",
]
