"""Comment aggregate with one level of replies."""

from datetime import datetime

from plaza.domain.shared.time import ensure_tz_aware, utc_now
from plaza.domain.social.exceptions import (
    InvalidContentError,
    InvalidReplyTargetError,
    NotContentOwnerError,
)

COMMENT_CONTENT_MAX_LENGTH = 1000
DELETED_COMMENT_CONTENT = "deleted comment"


def _validate_content(content: str) -> str:
    if content is None or not content.strip():
        msg = "Comment content cannot be empty"
        raise InvalidContentError(msg)
    if len(content) > COMMENT_CONTENT_MAX_LENGTH:
        msg = f"Comment content cannot exceed {COMMENT_CONTENT_MAX_LENGTH} characters"
        raise InvalidContentError(msg)
    return content


class Comment:
    """
    Comment on a post, or a reply to a root comment.

    Deleting a comment keeps the row so its replies stay attached; the
    text is replaced with a placeholder.
    """

    def __init__(  # NOQA: PLR0913
        self,
        post_id: int,
        author_id: int,
        content: str,
        parent_id: int | None = None,
        id: int | None = None,
        like_count: int = 0,
        is_deleted: bool = False,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id
        self._post_id = post_id
        self._author_id = author_id
        self._parent_id = parent_id
        # Stored rows of deleted comments hold the placeholder text
        self._content = content if is_deleted else _validate_content(content)
        self._like_count = like_count
        self._is_deleted = is_deleted
        self._created_at = ensure_tz_aware(created_at) if created_at else utc_now()
        self._updated_at = ensure_tz_aware(updated_at) if updated_at else utc_now()

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def post_id(self) -> int:
        return self._post_id

    @property
    def author_id(self) -> int:
        return self._author_id

    @property
    def parent_id(self) -> int | None:
        return self._parent_id

    @property
    def is_root(self) -> bool:
        return self._parent_id is None

    @property
    def content(self) -> str:
        return self._content

    @property
    def like_count(self) -> int:
        return self._like_count

    @property
    def is_deleted(self) -> bool:
        return self._is_deleted

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def assign_id(self, comment_id: int) -> None:
        self._id = comment_id

    def ensure_author(self, user_id: int) -> None:
        if self._author_id != user_id:
            raise NotContentOwnerError("comment", self._id or 0)

    def edit(self, content: str) -> None:
        self._content = _validate_content(content)
        self._updated_at = utc_now()

    def soft_delete(self) -> None:
        self._is_deleted = True
        self._content = DELETED_COMMENT_CONTENT
        self._updated_at = utc_now()

    def with_like_count(self, like_count: int) -> None:
        self._like_count = like_count

    @classmethod
    def create(cls, post_id: int, author_id: int, content: str) -> "Comment":
        return cls(post_id=post_id, author_id=author_id, content=content)

    @classmethod
    def create_reply(cls, parent: "Comment", author_id: int, content: str) -> "Comment":
        if not parent.is_root:
            raise InvalidReplyTargetError(parent.id or 0)
        return cls(
            post_id=parent.post_id,
            author_id=author_id,
            content=content,
            parent_id=parent.id,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: int,
        post_id: int,
        author_id: int,
        parent_id: int | None,
        content: str,
        like_count: int,
        is_deleted: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Comment":
        return cls(
            id=id,
            post_id=post_id,
            author_id=author_id,
            parent_id=parent_id,
            content=content,
            like_count=like_count,
            is_deleted=is_deleted,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __repr__(self) -> str:
        return f"Comment(id={self._id}, post_id={self._post_id}, parent_id={self._parent_id})"
