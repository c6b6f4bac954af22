"""
ORM models. Importing this package registers every table on ``Base.metadata``.
"""

from .base import Base
from .interaction import Comment, Like
from .log import Log, Media, MediaType
from .project import Project, ProjectTag
from .tag import Tag
from .user_profile import UserProfile

__all__ = [
    "Base",
    "Comment",
    "Like",
    "Log",
    "Media",
    "MediaType",
    "Project",
    "ProjectTag",
    "Tag",
    "UserProfile",
]
