from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.orm import joinedload
import uuid

from app.db.models.post import Post as PostModel
from app.domains.posts.entities import Author, Post


class PostRepository:
    """Репозиторий для работы с постами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, post: Post) -> Post:
        """Создание нового поста"""
        db_post = PostModel(
            id=post.id,
            title=post.title,
            summary=post.summary,
            content=post.content,
            cover=post.cover,
            author_id=post.author_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

        self.session.add(db_post)
        await self.session.commit()
        await self.session.refresh(db_post)
        return self._to_domain(db_post)

    async def get_by_id(self, post_id: uuid.UUID) -> Optional[Post]:
        """Получение поста по id вместе с автором"""
        result = await self.session.execute(
            select(PostModel)
            .options(joinedload(PostModel.author))
            .where(PostModel.id == post_id)
            .execution_options(populate_existing=True)
        )
        db_post = result.scalar_one_or_none()
        return self._to_domain(db_post, with_author=True) if db_post else None

    async def list_recent(self, limit: int = 20) -> List[Post]:
        """Последние посты, новые первыми"""
        result = await self.session.execute(
            select(PostModel)
            .options(joinedload(PostModel.author))
            .order_by(PostModel.created_at.desc(), PostModel.id.desc())
            .limit(limit)
        )
        db_posts = result.scalars().all()
        return [self._to_domain(post, with_author=True) for post in db_posts]

    async def update(self, post: Post) -> Post:
        """Обновление поста на месте"""
        stmt = (
            update(PostModel)
            .where(PostModel.id == post.id)
            .values(
                title=post.title,
                summary=post.summary,
                content=post.content,
                cover=post.cover,
                updated_at=post.updated_at,
            )
        )

        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_by_id(post.id)

    def _to_domain(self, db_post: PostModel, with_author: bool = False) -> Post:
        """Преобразование модели БД в доменную сущность"""
        author = None
        if with_author and db_post.author is not None:
            author = Author(id=db_post.author.id, username=db_post.author.username)

        return Post(
            id=db_post.id,
            title=db_post.title,
            summary=db_post.summary,
            content=db_post.content,
            cover=db_post.cover,
            author_id=db_post.author_id,
            created_at=db_post.created_at,
            updated_at=db_post.updated_at,
            author=author,
        )
