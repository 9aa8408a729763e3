from __future__ import annotations

import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import ANY, Stubber

from app.core.config import Settings
from app.infrastructure.media.uploader import (
    InMemoryMediaUploader,
    MediaNotConfigured,
    S3MediaUploader,
    build_media_uploader,
    detect_content_type,
)


@pytest.fixture()
def s3_client():
    return boto3.client(
        "s3",
        region_name="eu-central-1",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )


@pytest.mark.parametrize(
    ("filename", "content_type", "expected"),
    [
        ("cover.png", "image/png", "image/png"),
        ("photo.jpg", None, "image/jpeg"),
        ("photo.jpg", "application/octet-stream", "image/jpeg"),
        (None, None, "application/octet-stream"),
    ],
)
def test_detect_content_type(filename, content_type, expected) -> None:
    assert detect_content_type(filename, content_type) == expected


def test_s3_upload_puts_object_and_returns_public_url(s3_client) -> None:
    uploader = S3MediaUploader(
        bucket="blog-media",
        public_base_url="https://cdn.example.com/",
        client=s3_client,
    )

    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "put_object",
            {},
            {"Bucket": "blog-media", "Key": ANY, "Body": b"png-bytes", "ContentType": "image/png"},
        )
        url = uploader.upload(b"png-bytes", "cover.png", "image/png")
        stubber.assert_no_pending_responses()

    assert url.startswith("https://cdn.example.com/covers/")
    assert url.endswith(".png")


def test_s3_public_url_defaults_to_bucket_host(s3_client) -> None:
    uploader = S3MediaUploader(bucket="blog-media", region="eu-central-1", client=s3_client)

    assert uploader.public_url("covers/a.png") == (
        "https://blog-media.s3.eu-central-1.amazonaws.com/covers/a.png"
    )


def test_s3_provider_errors_propagate(s3_client) -> None:
    uploader = S3MediaUploader(bucket="blog-media", client=s3_client)

    with Stubber(s3_client) as stubber:
        stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(ClientError):
            uploader.upload(b"data", "cover.png", "image/png")


def test_build_media_uploader_without_bucket_refuses_uploads() -> None:
    uploader = build_media_uploader(Settings(media_bucket=None))

    assert not isinstance(uploader, InMemoryMediaUploader)
    with pytest.raises(MediaNotConfigured):
        uploader.upload(b"img", "a.png", "image/png")


def test_build_media_uploader_with_bucket_uses_s3() -> None:
    uploader = build_media_uploader(
        Settings(
            media_bucket="blog-media",
            media_region="eu-central-1",
            media_access_key_id="test",
            media_secret_access_key="test",
        )
    )

    assert isinstance(uploader, S3MediaUploader)
    assert uploader.bucket == "blog-media"
