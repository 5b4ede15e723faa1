"""Record model base classes."""

from .base import RecordModel

__all__ = ["RecordModel"]
