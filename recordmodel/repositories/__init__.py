"""Repository layer for persistence access."""

from .base import RecordRepository, coerce_id

__all__ = ["RecordRepository", "coerce_id"]
