"""Base factory configuration for polyfactory."""

from uuid import uuid4

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from src.crm.models.base import utc_now

__all__ = ["BaseFactory", "generate_uuid", "utc_now"]


def generate_uuid():
    """Generate UUID4 for primary keys."""
    return uuid4()


class BaseFactory(SQLAlchemyFactory):
    """Base factory with common configuration for all models.

    Relationships and foreign keys are never generated: tests set FK values
    explicitly so every row lands in the tenant under test.
    """

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False
    __allow_none_optionals__ = False
