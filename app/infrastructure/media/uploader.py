"""
Загрузка обложек постов во внешнее хранилище (S3-совместимое); in-memory вариант для тестов.
"""

import logging
import mimetypes
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

import boto3
from botocore.config import Config

from app.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class MediaFile:
    """Файл из multipart-запроса, целиком в памяти"""
    data: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None


class MediaUploader(Protocol):
    """Что сервису постов нужно от хранилища медиа"""

    def upload(self, data: bytes, filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
        ...


def detect_content_type(filename: Optional[str], content_type: Optional[str]) -> str:
    """Тип ресурса: заявленный клиентом, иначе по расширению файла"""
    if content_type and content_type != DEFAULT_CONTENT_TYPE:
        return content_type
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return DEFAULT_CONTENT_TYPE


def build_object_key(prefix: str, filename: Optional[str], content_type: str) -> str:
    if filename and "." in filename:
        extension = "." + filename.rsplit(".", 1)[1].lower()
    else:
        extension = mimetypes.guess_extension(content_type) or ""
    return f"{prefix.strip('/')}/{uuid.uuid4().hex}{extension}"


@dataclass
class InMemoryMediaUploader:
    """Тестовый двойник хранилища"""

    base_url: str = "https://media.example.test"
    prefix: str = "covers"
    stored_objects: Dict[str, bytes] = field(default_factory=dict)
    content_types: Dict[str, str] = field(default_factory=dict)

    def upload(self, data: bytes, filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
        resolved_type = detect_content_type(filename, content_type)
        key = build_object_key(self.prefix, filename, resolved_type)
        self.stored_objects[key] = data
        self.content_types[key] = resolved_type
        return f"{self.base_url}/{key}"


@dataclass
class S3MediaUploader:
    """
    Загрузка в S3-совместимое хранилище. Ошибки провайдера не перехватываются.
    """

    bucket: str
    region: Optional[str] = None
    endpoint: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    public_base_url: Optional[str] = None
    prefix: str = "covers"
    client: Optional[object] = None

    def __post_init__(self):
        if self.client is None:
            self.client = boto3.client(
                "s3",
                endpoint_url=self.endpoint,
                region_name=self.region,
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                config=Config(signature_version="s3v4"),
            )

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.endpoint:
            return f"{self.endpoint.rstrip('/')}/{self.bucket}/{key}"
        region = self.region or "us-east-1"
        return f"https://{self.bucket}.s3.{region}.amazonaws.com/{key}"

    def upload(self, data: bytes, filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
        resolved_type = detect_content_type(filename, content_type)
        key = build_object_key(self.prefix, filename, resolved_type)
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=resolved_type,
        )
        logger.info(f"Uploaded {len(data)} bytes to s3://{self.bucket}/{key}")
        return self.public_url(key)


class MediaNotConfigured(RuntimeError):
    """Бакет для обложек не задан"""


class UnconfiguredMediaUploader:
    """Хранилище без бакета: любая загрузка завершается ошибкой"""

    def upload(self, data: bytes, filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
        raise MediaNotConfigured("MEDIA_BUCKET is not set, cannot upload covers")


def build_media_uploader(settings: Settings) -> MediaUploader:
    """Хранилище из настроек; без бакета посты с файлом отклоняются"""
    if not settings.media_bucket:
        logger.warning("MEDIA_BUCKET is not set, posts with a cover will fail")
        return UnconfiguredMediaUploader()

    return S3MediaUploader(
        bucket=settings.media_bucket,
        region=settings.media_region,
        endpoint=settings.media_endpoint,
        access_key_id=settings.media_access_key_id,
        secret_access_key=settings.media_secret_access_key,
        public_base_url=settings.media_public_base_url,
        prefix=settings.media_prefix,
    )
