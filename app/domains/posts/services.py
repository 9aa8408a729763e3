import logging
import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.errors import Forbidden, InternalError, NotFound
from app.db.repositories.post_repository import PostRepository
from app.domains.identity.schemas import TokenData
from app.domains.posts.entities import Post
from app.infrastructure.media.uploader import MediaFile, MediaUploader

logger = logging.getLogger(__name__)

RECENT_POSTS_LIMIT = 20


class PostService:
    """Сервис для работы с постами"""

    def __init__(self, session: AsyncSession, uploader: MediaUploader):
        self.session = session
        self.uploader = uploader
        self.post_repository = PostRepository(session)

    async def _upload_cover(self, file: MediaFile) -> str:
        # boto3 блокирующий, выносим в пул потоков
        try:
            url = await run_in_threadpool(
                self.uploader.upload, file.data, file.filename, file.content_type
            )
        except Exception as exc:
            logger.exception(f"Cover upload failed for {file.filename}")
            raise InternalError("Cover upload failed", code="upload_failed") from exc
        logger.info(f"Cover uploaded: {url}")
        return url

    async def create_post(
        self,
        identity: TokenData,
        title: str,
        summary: str,
        content: str,
        file: Optional[MediaFile] = None,
    ) -> Post:
        """Создание поста; ошибка загрузки обложки отменяет создание"""
        cover = await self._upload_cover(file) if file else None

        post = Post.create_post(
            title=title,
            summary=summary,
            content=content,
            author_id=identity.id,
            cover=cover,
        )
        created = await self.post_repository.create(post)
        logger.info(f"Post {created.id} created by {identity.username}")
        return created

    async def update_post(
        self,
        identity: TokenData,
        post_id: uuid.UUID,
        title: str,
        summary: str,
        content: str,
        file: Optional[MediaFile] = None,
    ) -> Post:
        """Обновление поста автором; без нового файла обложка сохраняется.

        Возвращает пост в том виде, в каком он сохранён после обновления
        (повторное чтение из БД), а не объект до изменения.
        """
        post = await self.post_repository.get_by_id(post_id)

        if not post:
            raise NotFound("Post not found", code="post_not_found")

        if not post.is_authored_by(identity.id):
            logger.info(f"User {identity.username} is not the author of post {post_id}")
            raise Forbidden("You are not the author", code="not_author")

        cover = await self._upload_cover(file) if file else post.cover
        post.edit(title=title, summary=summary, content=content, cover=cover)

        updated = await self.post_repository.update(post)
        logger.info(f"Post {post_id} updated by {identity.username}")
        return updated

    async def list_posts(self) -> List[Post]:
        """Последние 20 постов с авторами"""
        return await self.post_repository.list_recent(limit=RECENT_POSTS_LIMIT)

    async def get_post(self, post_id: uuid.UUID) -> Post:
        """Один пост с автором"""
        post = await self.post_repository.get_by_id(post_id)

        if not post:
            raise NotFound("Post not found", code="post_not_found")

        return post
