"""Declarative base; ``Base.metadata.create_all`` runs in the application lifespan."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for the record store's ORM models."""
