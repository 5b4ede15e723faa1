"""Exception hierarchy for the record layer.

Lifecycle hooks abort a save by returning ``False``; these exceptions cover
misuse of the record API itself. Database errors raised by SQLAlchemy are
never wrapped.
"""


class RecordModelError(Exception):
    """Base exception for record-layer errors."""

    def __init__(self, message: str = "Record model error") -> None:
        super().__init__(message)
        self.message = message


class RecordNotFoundError(RecordModelError):
    """Raised when a record requested by primary key does not exist."""


class InvalidFieldError(RecordModelError):
    """Raised when criteria or sort refer to a column the model does not map."""


class InvalidSortError(RecordModelError):
    """Raised when a sort direction is neither ASC nor DESC."""


class ProviderNotConfiguredError(RecordModelError):
    """Raised when no persistence provider is bound for the current context."""
