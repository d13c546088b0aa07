from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All marketplace tables inherit from this base class so they share one
    MetaData, which Alembic and the test fixtures use to build the schema.
    """

    pass
