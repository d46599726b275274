from plaza.presentation.api.routers.admin import router as admin_router
from plaza.presentation.api.routers.auth import router as auth_router
from plaza.presentation.api.routers.comments import router as comments_router
from plaza.presentation.api.routers.likes import router as likes_router
from plaza.presentation.api.routers.posts import router as posts_router

__all__ = [
    "admin_router",
    "auth_router",
    "comments_router",
    "likes_router",
    "posts_router",
]
