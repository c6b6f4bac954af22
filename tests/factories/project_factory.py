"""
Factory for Project model.
"""

import uuid

import factory

from lognest.core.ids import new_id
from lognest.core.slug import to_slug
from lognest.db.models import Project
from .base_factory import BaseFactory


class ProjectFactory(BaseFactory):
    """Factory for creating test Project instances."""

    class Meta:
        model = Project

    id = factory.LazyFunction(new_id)
    user_id = factory.LazyFunction(uuid.uuid4)
    title = factory.Faker("sentence", nb_words=4)
    description = factory.Faker("paragraph")
    slug = factory.LazyAttribute(lambda obj: to_slug(obj.title))
    is_public = True


class PrivateProjectFactory(ProjectFactory):
    is_public = False
