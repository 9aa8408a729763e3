from pydantic import BaseModel, ConfigDict
from typing import Optional
import uuid
from datetime import datetime


class AuthorResponse(BaseModel):
    """Автор поста"""
    id: uuid.UUID
    username: str

    model_config = ConfigDict(from_attributes=True)


class PostBase(BaseModel):
    """Базовая схема поста"""
    title: str
    summary: str
    content: str
    cover: Optional[str] = None


class PostResponse(PostBase):
    """Пост сразу после создания или обновления"""
    id: uuid.UUID
    author: uuid.UUID
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, post) -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            summary=post.summary,
            content=post.content,
            cover=post.cover,
            author=post.author_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostDetailResponse(PostBase):
    """Пост с подставленным автором"""
    id: uuid.UUID
    author: AuthorResponse
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, post) -> "PostDetailResponse":
        return cls(
            id=post.id,
            title=post.title,
            summary=post.summary,
            content=post.content,
            cover=post.cover,
            author=AuthorResponse.model_validate(post.author),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
