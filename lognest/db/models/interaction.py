"""
Comment and like models.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin, utcnow


class Comment(UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "comments"

    user_profile_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    log_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("logs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    body: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, log_id={self.log_id})>"


class Like(Base):
    __tablename__ = "likes"

    user_profile_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    log_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("logs.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Like(user_profile_id={self.user_profile_id}, log_id={self.log_id})>"
