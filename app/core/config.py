from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./blog.db"
    sql_echo: bool = False

    jwt_secret: str = "defaultSecret"
    jwt_algorithm: str = "HS256"
    # Без значения токен выдаётся без exp
    jwt_expire_minutes: Optional[int] = None
    cookie_secure: bool = False

    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # S3-совместимое хранилище для обложек
    media_bucket: Optional[str] = None
    media_region: Optional[str] = None
    media_endpoint: Optional[str] = None
    media_access_key_id: Optional[str] = None
    media_secret_access_key: Optional[str] = None
    media_public_base_url: Optional[str] = None
    media_prefix: str = "covers"

    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Настройки читаются один раз при старте процесса"""
    return Settings()


settings = get_settings()
