"""
Base factory configuration for all model factories.
"""

import factory


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """
    Base factory bound to the test session.

    ``conftest`` points ``_meta.sqlalchemy_session`` at the async test session.
    Instances are only added to it; fixtures commit them.
    """

    class Meta:
        abstract = True
        sqlalchemy_session_persistence = None
