"""Social domain exceptions (posts, comments, likes)."""

from plaza.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    PermissionDeniedError,
    ValidationError,
)


class InvalidContentError(ValidationError):
    """Raised when post or comment text is blank or too long."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_CONTENT)


class PostNotFoundError(EntityNotFoundError):
    """Raised when a post does not exist, is deleted or is hidden from the caller."""

    def __init__(self, post_id: int) -> None:
        self.post_id = post_id
        super().__init__(
            f"Post '{post_id}' not found",
            code=ErrorCode.POST_NOT_FOUND,
            details={"post_id": post_id},
        )


class CommentNotFoundError(EntityNotFoundError):
    """Raised when a comment does not exist or is deleted."""

    def __init__(self, comment_id: int) -> None:
        self.comment_id = comment_id
        super().__init__(
            f"Comment '{comment_id}' not found",
            code=ErrorCode.COMMENT_NOT_FOUND,
            details={"comment_id": comment_id},
        )


class InvalidReplyTargetError(ValidationError):
    """Replies are only allowed one level deep."""

    def __init__(self, parent_id: int) -> None:
        super().__init__(
            "Cannot reply to a reply",
            code=ErrorCode.INVALID_REPLY_TARGET,
            details={"parent_id": parent_id},
        )


class NotContentOwnerError(PermissionDeniedError):
    """Raised when a user edits or deletes content they did not write."""

    def __init__(self, resource: str, resource_id: int) -> None:
        super().__init__(
            f"You do not have permission to modify this {resource}",
            code=ErrorCode.NOT_CONTENT_OWNER,
            details={"resource": resource, "resource_id": resource_id},
        )


class DuplicateLikeError(ConflictError):
    """Raised when a user likes the same target twice."""

    def __init__(self, target_type: str, target_id: int) -> None:
        super().__init__(
            f"Already liked this {target_type.lower()}",
            code=ErrorCode.DUPLICATE_LIKE,
            details={"target_type": target_type, "target_id": target_id},
        )


class LikeNotFoundError(EntityNotFoundError):
    """Raised when removing a like that does not exist."""

    def __init__(self, target_type: str, target_id: int) -> None:
        super().__init__(
            f"You have not liked this {target_type.lower()}",
            code=ErrorCode.LIKE_NOT_FOUND,
            details={"target_type": target_type, "target_id": target_id},
        )
