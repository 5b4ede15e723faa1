"""Entity-manager style facade over a SQLAlchemy session."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Type, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session

from recordmodel.core import get_logger, settings
from recordmodel.domain.exceptions import InvalidFieldError, InvalidSortError

logger = get_logger(__name__)

TEntity = TypeVar("TEntity")

SortSpec = Mapping[str, str]


class PersistenceProvider:
    """Find, persist, merge and remove entities through one session.

    ``flush()`` ends the unit of work: it flushes pending changes and, unless
    the provider was built with ``commit_on_flush=False``, commits them.
    """

    def __init__(self, session: Session, commit_on_flush: bool | None = None) -> None:
        self.session = session
        self.commit_on_flush = (
            settings.commit_on_flush if commit_on_flush is None else commit_on_flush
        )

    # ------------------------------------------------------------------
    # Reads

    def find_by_id(self, model: Type[TEntity], entity_id: int) -> Optional[TEntity]:
        return self.session.get(model, entity_id)

    def find_by(
        self,
        model: Type[TEntity],
        criteria: Mapping[str, Any],
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
    ) -> list[TEntity]:
        """Return entities matching equality ``criteria``.

        A list, tuple or set value turns into an ``IN`` clause. ``sort`` maps
        column names to ``ASC``/``DESC``.
        """
        stmt = select(model)
        for field, value in criteria.items():
            column = self._column(model, field)
            if isinstance(value, (list, tuple, set, frozenset)):
                stmt = stmt.where(column.in_(list(value)))
            else:
                stmt = stmt.where(column == value)
        for field, direction in (sort or {}).items():
            stmt = stmt.order_by(self._ordering(model, field, direction))
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.scalars(stmt).all())

    def find_one_by(
        self,
        model: Type[TEntity],
        criteria: Mapping[str, Any],
        sort: Optional[SortSpec] = None,
    ) -> Optional[TEntity]:
        found = self.find_by(model, criteria, sort=sort, limit=1)
        return found[0] if found else None

    # ------------------------------------------------------------------
    # Writes

    def persist(self, entity: TEntity) -> None:
        self.session.add(entity)

    def merge(self, entity: TEntity) -> TEntity:
        return self.session.merge(entity)

    def remove(self, entity: TEntity) -> None:
        if entity not in self.session:
            entity = self.session.merge(entity)
        self.session.delete(entity)

    def flush(self) -> None:
        self.session.flush()
        if self.commit_on_flush:
            self.session.commit()
            logger.debug("Committed unit of work")

    # ------------------------------------------------------------------
    # Helpers

    @staticmethod
    def _column(model: type, field: str):
        columns = inspect(model).columns
        if field not in columns:
            raise InvalidFieldError(f"{model.__name__} has no column '{field}'")
        return getattr(model, field)

    def _ordering(self, model: type, field: str, direction: str):
        column = self._column(model, field)
        normalized = str(direction).upper()
        if normalized == "ASC":
            return column.asc()
        if normalized == "DESC":
            return column.desc()
        raise InvalidSortError(f"Invalid sort direction '{direction}' for '{field}'")


def normalize_sort(sort: Optional[SortSpec | str]) -> dict[str, str]:
    """Turn a bare field name into ``{field: "ASC"}``; copy mappings as-is."""
    if not sort:
        return {}
    if isinstance(sort, str):
        return {sort: "ASC"}
    return dict(sort)
