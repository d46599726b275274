"""SQLAlchemy model for likes on posts and comments."""

from datetime import datetime

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from plaza.domain.shared.time import utc_now
from plaza.infrastructure.persistence.sqlalchemy.models.base import Base


class LikeModel(Base):
    """
    One row per (user, target). The target is a type tag plus id with no
    foreign key, since it can point at either table.

    Table: likes
    """

    __tablename__ = "likes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    target_type: Mapped[str] = mapped_column(String(20), nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "target_type",
            "target_id",
            name="uq_likes_user_target",
        ),
        Index("ix_likes_target", "target_type", "target_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<LikeModel(user_id={self.user_id}, "
            f"target={self.target_type}:{self.target_id})>"
        )
