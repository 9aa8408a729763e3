from fastapi import APIRouter, Depends, File, Form, UploadFile
from typing import List, Optional
import uuid

from app.core.auth import get_current_identity, get_post_service
from app.domains.identity.schemas import TokenData
from app.domains.posts.schemas import PostDetailResponse, PostResponse
from app.domains.posts.services import PostService
from app.infrastructure.media.uploader import MediaFile

router = APIRouter(prefix="/post", tags=["posts"])


async def _read_upload(file: Optional[UploadFile]) -> Optional[MediaFile]:
    """Файл из формы целиком в память; пустое поле считается отсутствующим"""
    if file is None or not file.filename:
        return None

    data = await file.read()
    if not data:
        return None

    return MediaFile(data=data, filename=file.filename, content_type=file.content_type)


@router.post("", response_model=PostResponse)
async def create_post(
    title: str = Form(..., min_length=1, max_length=255),
    summary: str = Form(""),
    content: str = Form(""),
    file: Optional[UploadFile] = File(None),
    identity: TokenData = Depends(get_current_identity),
    post_service: PostService = Depends(get_post_service),
):
    """Создание поста с необязательной обложкой"""
    media = await _read_upload(file)
    post = await post_service.create_post(identity, title, summary, content, media)
    return PostResponse.from_entity(post)


@router.put("", response_model=PostResponse)
async def update_post(
    id: uuid.UUID = Form(...),
    title: str = Form(..., min_length=1, max_length=255),
    summary: str = Form(""),
    content: str = Form(""),
    file: Optional[UploadFile] = File(None),
    identity: TokenData = Depends(get_current_identity),
    post_service: PostService = Depends(get_post_service),
):
    """Обновление поста автором"""
    media = await _read_upload(file)
    post = await post_service.update_post(identity, id, title, summary, content, media)
    return PostResponse.from_entity(post)


@router.get("", response_model=List[PostDetailResponse])
async def list_posts(post_service: PostService = Depends(get_post_service)):
    """Последние 20 постов"""
    posts = await post_service.list_posts()
    return [PostDetailResponse.from_entity(post) for post in posts]


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(
    post_id: uuid.UUID,
    post_service: PostService = Depends(get_post_service),
):
    """Один пост с автором"""
    post = await post_service.get_post(post_id)
    return PostDetailResponse.from_entity(post)
