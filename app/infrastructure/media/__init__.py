from app.infrastructure.media.uploader import (
    MediaFile, MediaUploader, MediaNotConfigured, S3MediaUploader, InMemoryMediaUploader,
    UnconfiguredMediaUploader, build_media_uploader
)

__all__ = [
    "MediaFile",
    "MediaUploader",
    "MediaNotConfigured",
    "S3MediaUploader",
    "InMemoryMediaUploader",
    "UnconfiguredMediaUploader",
    "build_media_uploader",
]
