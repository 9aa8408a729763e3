from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from app.core.auth import get_media_uploader
from app.core.config import Settings, get_settings
from app.core.db import get_db, init_models
from app.infrastructure.media.uploader import InMemoryMediaUploader
from app.main import create_app


@pytest.fixture()
def settings() -> Settings:
    return Settings(jwt_secret="test-secret", jwt_expire_minutes=None)


@pytest.fixture()
def session_factory(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}", poolclass=NullPool
    )
    asyncio.run(init_models(engine))
    yield sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture()
def uploader() -> InMemoryMediaUploader:
    return InMemoryMediaUploader()


@pytest.fixture()
def app(settings: Settings, session_factory, uploader) -> FastAPI:
    application = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_media_uploader] = lambda: uploader
    return application


@pytest.fixture()
def make_client(app: FastAPI) -> Callable[[], TestClient]:
    def factory() -> TestClient:
        return TestClient(app)

    return factory


@pytest.fixture()
def client(make_client) -> TestClient:
    return make_client()


def register_and_login(client: TestClient, username: str, password: str = "secret123") -> dict:
    response = client.post("/register", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    response = client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture()
def login_as(make_client) -> Callable[..., tuple[TestClient, dict]]:
    """Отдельный клиент с cookie нового пользователя"""

    def factory(username: str, password: str = "secret123") -> tuple[TestClient, dict]:
        user_client = make_client()
        identity = register_and_login(user_client, username, password)
        return user_client, identity

    return factory
