from app.api.http.health import router as health_router
from app.api.http.auth import router as auth_router
from app.api.http.posts import router as posts_router

__all__ = [
    "health_router",
    "auth_router",
    "posts_router"
]
