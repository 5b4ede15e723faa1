"""Active-record base class and persistence helpers for plugin data models."""

from recordmodel.db import PersistenceProvider, connection_source, get_provider, provider_scope
from recordmodel.models import RecordModel
from recordmodel.repositories import RecordRepository

__version__ = "0.1.0"

__all__ = [
    "PersistenceProvider",
    "RecordModel",
    "RecordRepository",
    "connection_source",
    "get_provider",
    "provider_scope",
]
