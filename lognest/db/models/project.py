"""
Project model and its project-tag join table.
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin
from .tag import Tag


class ProjectTag(Base):
    """One association edge between a project and a tag."""

    __tablename__ = "project_tags"

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    )

    def __repr__(self) -> str:
        return f"<ProjectTag(project_id={self.project_id}, tag_id={self.tag_id})>"


class Project(UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "projects"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    is_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    # Written only through lognest.db.association; read-only here
    tags: Mapped[list[Tag]] = relationship(
        Tag,
        secondary=ProjectTag.__table__,
        primaryjoin="Project.id == ProjectTag.project_id",
        secondaryjoin="and_(Tag.id == ProjectTag.tag_id, Tag.deleted_at.is_(None))",
        order_by=Tag.name,
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, slug='{self.slug}')>"
