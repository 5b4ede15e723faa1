"""Domain-level definitions shared by the record layer."""

from .exceptions import (
    InvalidFieldError,
    InvalidSortError,
    ProviderNotConfiguredError,
    RecordModelError,
    RecordNotFoundError,
)

__all__ = [
    "InvalidFieldError",
    "InvalidSortError",
    "ProviderNotConfiguredError",
    "RecordModelError",
    "RecordNotFoundError",
]
