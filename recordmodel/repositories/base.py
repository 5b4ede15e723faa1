"""Base repository for record classes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, Literal, Optional, Type, TypeVar

from recordmodel.core import get_logger, settings
from recordmodel.db.provider import PersistenceProvider, SortSpec, normalize_sort
from recordmodel.domain.exceptions import RecordNotFoundError

logger = get_logger(__name__)

TRecord = TypeVar("TRecord")


def coerce_id(value: Any) -> Optional[int]:
    """Return ``value`` as a positive int, or ``None`` when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        record_id = int(value)
    except (TypeError, ValueError):
        return None
    return record_id if record_id > 0 else None


class RecordRepository(Generic[TRecord]):
    """Query helpers for one record class, bound to an explicit provider."""

    def __init__(self, model: Type[TRecord], provider: PersistenceProvider) -> None:
        self.model = model
        self.provider = provider

    def factory(self) -> TRecord:
        return self.model()

    def get_by_id(self, record_id: Any) -> TRecord | None | Literal[False]:
        """Load a record by primary key.

        Returns ``False`` without querying when ``record_id`` is not a positive
        integer, and ``None`` when no row matches. A found record is merged
        back into the session before it is returned.
        """
        coerced = coerce_id(record_id)
        if coerced is None:
            logger.debug(
                "Rejected record id",
                extra={"record_class": self.model.__name__, "record_id": repr(record_id)},
            )
            return False
        found = self.provider.find_by_id(self.model, coerced)
        if found is None:
            return None
        return self.provider.merge(found)

    def get_or_fail(self, record_id: Any) -> TRecord:
        found = self.get_by_id(record_id)
        if not found:
            raise RecordNotFoundError(f"{self.model.__name__} {record_id!r} not found")
        return found

    def load_by_ids(self, ids: Iterable[int]) -> list[TRecord]:
        return self.provider.find_by(self.model, {"id": list(ids)})

    def get_all(self, sort: Optional[SortSpec | str] = None) -> list[TRecord]:
        if not sort:
            sort = getattr(self.model, "default_sort", None)
        return self.provider.find_by(self.model, {}, sort=normalize_sort(sort))

    def find_by(
        self,
        criteria: Mapping[str, Any],
        sort: Optional[SortSpec | str] = None,
        limit: Optional[int] = None,
    ) -> list[TRecord]:
        return self.provider.find_by(self.model, criteria, sort=normalize_sort(sort), limit=limit)

    def get_last(self) -> Optional[TRecord]:
        # Assumes ids grow with insertion order.
        return self.provider.find_one_by(self.model, {}, sort={"id": "DESC"})

    def get_recent(self, num: Optional[int] = None) -> list[TRecord]:
        limit = settings.recent_limit if num is None else num
        return self.provider.find_by(self.model, {}, sort={"id": "DESC"}, limit=limit)
