from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Cookie, Depends
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.db import get_db
from app.core.errors import Unauthorized
from app.domains.identity.schemas import TokenData
from app.domains.identity.services import IdentityService
from app.domains.posts.services import PostService
from app.infrastructure.media.uploader import MediaUploader, build_media_uploader

TOKEN_COOKIE = "token"


def get_identity_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> IdentityService:
    expires_delta = None
    if settings.jwt_expire_minutes:
        expires_delta = timedelta(minutes=settings.jwt_expire_minutes)

    return IdentityService(
        db,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_delta=expires_delta,
    )


async def get_current_identity(
    token: Optional[str] = Cookie(None),
    identity_service: IdentityService = Depends(get_identity_service),
) -> TokenData:
    """Личность из cookie; 401 если токена нет или подпись не сходится"""
    payload = identity_service.current_identity(token)
    try:
        return TokenData.model_validate(payload)
    except PydanticValidationError:
        raise Unauthorized("Invalid token", code="invalid_token")


@lru_cache(maxsize=1)
def get_media_uploader() -> MediaUploader:
    return build_media_uploader(get_settings())


def get_post_service(
    db: AsyncSession = Depends(get_db),
    uploader: MediaUploader = Depends(get_media_uploader),
) -> PostService:
    return PostService(db, uploader)
