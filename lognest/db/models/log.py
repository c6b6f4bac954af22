"""
Log entries and their attached media.
"""

import enum
import uuid

from sqlalchemy import Enum, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin
from .interaction import Comment


class MediaType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"


class Media(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "media"

    log_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("logs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_path: Mapped[str] = mapped_column(String(255), nullable=False)
    thumbnail_path: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    type: Mapped[MediaType] = mapped_column(
        Enum(
            MediaType,
            name="media_type",
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Log(UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "logs"

    user_profile_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    media: Mapped[list[Media]] = relationship(
        Media,
        order_by=Media.sort_order,
        cascade="all, delete-orphan",
        lazy="raise",
    )
    comments: Mapped[list[Comment]] = relationship(
        Comment,
        primaryjoin="and_(Log.id == Comment.log_id, Comment.deleted_at.is_(None))",
        order_by=Comment.created_at,
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Log(id={self.id}, project_id={self.project_id})>"
