"""SQLAlchemy declarative base shared by every record class."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all mapped models."""

    pass
