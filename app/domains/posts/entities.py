import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass
class Author:
    """Автор поста в том виде, в каком он отдаётся клиенту"""
    id: uuid.UUID
    username: str


class Post:
    """Сущность поста блога"""

    def __init__(
        self,
        id: uuid.UUID,
        title: str,
        summary: str,
        content: str,
        author_id: uuid.UUID,
        cover: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        author: Optional[Author] = None,
    ):
        self.id = id
        self.title = title
        self.summary = summary
        self.content = content
        self.cover = cover
        self.author_id = author_id
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or self.created_at
        self.author = author

    def is_authored_by(self, user_id: uuid.UUID) -> bool:
        """Редактировать пост может только его автор"""
        return str(self.author_id) == str(user_id)

    def edit(self, title: str, summary: str, content: str, cover: Optional[str]) -> None:
        """Перезапись полей поста; автор не меняется"""
        self.title = title
        self.summary = summary
        self.content = content
        self.cover = cover
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_post(
        cls,
        title: str,
        summary: str,
        content: str,
        author_id: uuid.UUID,
        cover: Optional[str] = None,
    ) -> "Post":
        """Создание нового поста"""
        return cls(
            id=uuid.uuid4(),
            title=title,
            summary=summary,
            content=content,
            author_id=author_id,
            cover=cover,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Post):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Post(id={self.id}, title={self.title}, author_id={self.author_id})"
