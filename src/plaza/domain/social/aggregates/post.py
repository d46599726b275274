"""Post aggregate."""

from datetime import datetime
from typing import Union

from plaza.domain.shared.time import ensure_tz_aware, utc_now
from plaza.domain.social.exceptions import InvalidContentError, NotContentOwnerError
from plaza.domain.social.value_objects import Visibility

POST_CONTENT_MAX_LENGTH = 5000


def _validate_content(content: str) -> str:
    if content is None or not content.strip():
        msg = "Post content cannot be empty"
        raise InvalidContentError(msg)
    if len(content) > POST_CONTENT_MAX_LENGTH:
        msg = f"Post content cannot exceed {POST_CONTENT_MAX_LENGTH} characters"
        raise InvalidContentError(msg)
    return content


class Post:
    """
    Post aggregate root.

    Counters (likes, comments, views) are denormalized and maintained by
    the repository with atomic UPDATEs; the values held here are a
    snapshot from load time.
    """

    def __init__(  # NOQA: PLR0913
        self,
        author_id: int,
        content: str,
        visibility: Union[str, Visibility] = Visibility.PUBLIC,
        id: int | None = None,
        like_count: int = 0,
        comment_count: int = 0,
        view_count: int = 0,
        is_deleted: bool = False,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id
        self._author_id = author_id
        self._content = _validate_content(content)
        self._visibility = (
            visibility if isinstance(visibility, Visibility) else Visibility(visibility)
        )
        self._like_count = like_count
        self._comment_count = comment_count
        self._view_count = view_count
        self._is_deleted = is_deleted
        self._created_at = ensure_tz_aware(created_at) if created_at else utc_now()
        self._updated_at = ensure_tz_aware(updated_at) if updated_at else utc_now()

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def author_id(self) -> int:
        return self._author_id

    @property
    def content(self) -> str:
        return self._content

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    @property
    def like_count(self) -> int:
        return self._like_count

    @property
    def comment_count(self) -> int:
        return self._comment_count

    @property
    def view_count(self) -> int:
        return self._view_count

    @property
    def is_deleted(self) -> bool:
        return self._is_deleted

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def assign_id(self, post_id: int) -> None:
        self._id = post_id

    def is_authored_by(self, user_id: int) -> bool:
        return self._author_id == user_id

    def is_visible_to(self, user_id: int | None) -> bool:
        """PUBLIC posts are visible to everyone, others only to the author.

        There is no follow graph, so FOLLOWERS behaves like PRIVATE.
        """
        if self._is_deleted:
            return False
        if self._visibility == Visibility.PUBLIC:
            return True
        return user_id is not None and self.is_authored_by(user_id)

    def ensure_author(self, user_id: int) -> None:
        if not self.is_authored_by(user_id):
            raise NotContentOwnerError("post", self._id or 0)

    def update(
        self,
        content: str | None = None,
        visibility: Visibility | None = None,
    ) -> None:
        if content is not None:
            self._content = _validate_content(content)
        if visibility is not None:
            self._visibility = visibility
        self._updated_at = utc_now()

    def soft_delete(self) -> None:
        self._is_deleted = True
        self._updated_at = utc_now()

    def record_view(self) -> None:
        self._view_count += 1

    def with_like_count(self, like_count: int) -> None:
        self._like_count = like_count

    @classmethod
    def create(
        cls,
        author_id: int,
        content: str,
        visibility: Visibility = Visibility.PUBLIC,
    ) -> "Post":
        return cls(author_id=author_id, content=content, visibility=visibility)

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: int,
        author_id: int,
        content: str,
        visibility: Union[str, Visibility],
        like_count: int,
        comment_count: int,
        view_count: int,
        is_deleted: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Post":
        return cls(
            id=id,
            author_id=author_id,
            content=content,
            visibility=visibility,
            like_count=like_count,
            comment_count=comment_count,
            view_count=view_count,
            is_deleted=is_deleted,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __repr__(self) -> str:
        return f"Post(id={self._id}, author_id={self._author_id})"
