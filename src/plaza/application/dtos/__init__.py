from plaza.application.dtos.auth_dto import (
    AuthFailure,
    AuthResult,
    TokenPair,
    UserSummary,
)
from plaza.application.dtos.social_dto import (
    AdminUserView,
    AuthorView,
    CommentView,
    LikerView,
    LikeResult,
    PostView,
)

__all__ = [
    "AdminUserView",
    "AuthFailure",
    "AuthResult",
    "AuthorView",
    "CommentView",
    "LikeResult",
    "LikerView",
    "PostView",
    "TokenPair",
    "UserSummary",
]
