"""Database module initialization."""

from .base import Base
from .connection import ConnectionSource, connection_source, get_provider, provider_scope
from .provider import PersistenceProvider, normalize_sort
from .session import SessionLocal, build_engine, engine, get_db, init_db

__all__ = [
    "Base",
    "ConnectionSource",
    "PersistenceProvider",
    "SessionLocal",
    "build_engine",
    "connection_source",
    "engine",
    "get_db",
    "get_provider",
    "init_db",
    "normalize_sort",
    "provider_scope",
]
