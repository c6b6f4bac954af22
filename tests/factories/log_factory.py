"""
Factories for Log and Media models.
"""

import uuid

import factory

from lognest.core.ids import new_id
from lognest.db.models import Log, Media, MediaType
from .base_factory import BaseFactory


class LogFactory(BaseFactory):
    """Factory for creating test Log instances. Pass ``project_id``."""

    class Meta:
        model = Log

    id = factory.LazyFunction(new_id)
    user_profile_id = factory.LazyFunction(uuid.uuid4)
    project_id = None
    content = factory.Faker("paragraph", nb_sentences=3)
    like_count = 0
    comment_count = 0


class MediaFactory(BaseFactory):
    class Meta:
        model = Media

    id = factory.LazyFunction(new_id)
    log_id = None
    file_path = factory.Faker("file_path", depth=2, extension="png")
    thumbnail_path = ""
    type = MediaType.IMAGE
    sort_order = factory.Sequence(lambda n: n)
