from plaza.application.services.authentication_service import AuthenticationService
from plaza.application.services.comment_service import (
    DEFAULT_COMMENT_PAGE_SIZE,
    CommentService,
)
from plaza.application.services.credential_verifier import (
    AccountGateReason,
    AccountGateResult,
    CredentialVerifier,
)
from plaza.application.services.identity_resolver import (
    Anonymous,
    Authenticated,
    IdentityResolution,
    Rejected,
    RejectionReason,
    RequestIdentityResolver,
    extract_bearer_token,
)
from plaza.application.services.like_service import (
    DEFAULT_LIKER_PAGE_SIZE,
    LikeService,
)
from plaza.application.services.post_service import (
    DEFAULT_POST_PAGE_SIZE,
    PostService,
)
from plaza.application.services.user_admin_service import UserAdminService

__all__ = [
    "DEFAULT_COMMENT_PAGE_SIZE",
    "DEFAULT_LIKER_PAGE_SIZE",
    "DEFAULT_POST_PAGE_SIZE",
    "AccountGateReason",
    "AccountGateResult",
    "Anonymous",
    "Authenticated",
    "AuthenticationService",
    "CommentService",
    "CredentialVerifier",
    "IdentityResolution",
    "LikeService",
    "PostService",
    "Rejected",
    "RejectionReason",
    "RequestIdentityResolver",
    "UserAdminService",
    "extract_bearer_token",
]
