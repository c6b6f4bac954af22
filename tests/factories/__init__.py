"""
Test factories for Lognest API models.
"""

from .interaction_factory import CommentFactory, LikeFactory
from .log_factory import LogFactory, MediaFactory
from .project_factory import PrivateProjectFactory, ProjectFactory
from .tag_factory import TagFactory
from .user_profile_factory import UserProfileFactory

ALL_FACTORIES = (
    CommentFactory,
    LikeFactory,
    LogFactory,
    MediaFactory,
    PrivateProjectFactory,
    ProjectFactory,
    TagFactory,
    UserProfileFactory,
)

__all__ = [
    "ALL_FACTORIES",
    "CommentFactory",
    "LikeFactory",
    "LogFactory",
    "MediaFactory",
    "PrivateProjectFactory",
    "ProjectFactory",
    "TagFactory",
    "UserProfileFactory",
]
