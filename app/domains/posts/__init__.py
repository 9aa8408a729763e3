from app.domains.posts.entities import Author, Post
from app.domains.posts.schemas import AuthorResponse, PostResponse, PostDetailResponse

__all__ = [
    "Author", "Post",
    "AuthorResponse", "PostResponse", "PostDetailResponse",
]
