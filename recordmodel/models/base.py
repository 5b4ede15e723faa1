"""Active-record base class for plugin data models.

Concrete models subclass :class:`RecordModel`, declare their columns the usual
SQLAlchemy way and inherit an auto-generated ``id`` plus persistence helpers::

    class Article(RecordModel):
        __tablename__ = "articles"
        default_sort = {"title": "ASC"}

        title: Mapped[str] = mapped_column(String(255))

        def set_title(self, value):
            self.title = value.strip()

    with provider_scope():
        article = Article.factory()
        article.set_data({"title": "  Hello  "})
        article.save()

Every operation takes an optional ``provider``; without one the provider bound
on the default connection source is used.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable, Mapping
from typing import Any, ClassVar, Literal, Optional, TypeVar

from sqlalchemy import Integer
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import Mapped, mapped_column

from recordmodel.core import LoggerAdapter, get_logger
from recordmodel.core.text import underscore_to_camel_case
from recordmodel.db.base import Base
from recordmodel.db.connection import get_provider
from recordmodel.db.provider import PersistenceProvider, SortSpec
from recordmodel.repositories.base import RecordRepository, coerce_id

logger = get_logger(__name__)

TRecord = TypeVar("TRecord", bound="RecordModel")

_SNAKE_SETTER = re.compile(r"^set_([a-z0-9_]+)$")
_CAMEL_SETTER = re.compile(r"^set([A-Z][A-Za-z0-9]*)$")
# Declarative internals set_data() must never overwrite.
_PROTECTED_NAMES = frozenset({"metadata", "registry", "skip_fields", "default_sort"})


def _setter_field(name: str) -> Optional[str]:
    """CamelCase field name a method named ``name`` sets, if it is a setter."""
    match = _SNAKE_SETTER.match(name)
    if match:
        return underscore_to_camel_case(match.group(1))
    match = _CAMEL_SETTER.match(name)
    if match:
        return match.group(1)
    return None


def _is_protected(cls: type, key: str) -> bool:
    """True when assigning ``key`` would replace behaviour rather than data."""
    if key.startswith("_") or key in _PROTECTED_NAMES:
        return True
    attr = getattr(cls, key, None)
    if isinstance(attr, property):
        return attr.fset is None
    return callable(attr)


class RecordModel(Base):
    """Base class for every persisted plugin model."""

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        Integer().with_variant(mysql.INTEGER(unsigned=True), "mysql"),
        primary_key=True,
        autoincrement=True,
    )

    # Keys set_data() never touches.
    skip_fields: ClassVar[tuple[str, ...]] = ("ccm_token", "id")
    # Used by get_all() when no sort is passed: {"column": "ASC"|"DESC"} or a column name.
    default_sort: ClassVar[Optional[SortSpec | str]] = None
    # CamelCase field name -> setter method name, built per class.
    _setters: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kw: Any) -> None:
        cls._setters = cls._collect_setters()
        super().__init_subclass__(**kw)

    @classmethod
    def _collect_setters(cls) -> dict[str, str]:
        reserved = set(vars(RecordModel))
        setters: dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            if klass in RecordModel.__mro__:
                continue
            for name, attr in vars(klass).items():
                if name in reserved or not callable(attr):
                    continue
                field = _setter_field(name)
                if field:
                    setters[field] = name
        return setters

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id})>"

    # ------------------------------------------------------------------
    # Identity and bulk assignment

    def get_id(self) -> Optional[int]:
        return self.id

    @property
    def is_new(self) -> bool:
        record_id = self.get_id()
        return not record_id or record_id <= 0

    def get_skip_fields(self) -> Collection[str]:
        return self.skip_fields

    def set_data(self, data: Mapping[str, Any]) -> None:
        """Assign every key of ``data`` to this record.

        Keys in :meth:`get_skip_fields` are ignored. A key with a registered
        setter (``set_first_name`` or ``setFirstName`` for ``first_name``) goes
        through the setter; any other key is assigned as an attribute of the
        same name, whether or not the model maps it. Keys naming a method, a
        read-only property or a declarative internal are dropped.
        """
        skip_fields = self.get_skip_fields()
        for key, value in data.items():
            if key in skip_fields:
                continue
            setter = self._setters.get(underscore_to_camel_case(key))
            if setter:
                getattr(self, setter)(value)
            elif _is_protected(type(self), key):
                self._log().debug("Ignored protected key", extra={"key": key})
            else:
                setattr(self, key, value)

    # ------------------------------------------------------------------
    # Lifecycle hooks

    def before_save(self) -> bool:
        """Runs before insert or update; returning False cancels the save."""
        return True

    def before_create(self) -> bool:
        """Runs before an insert only; returning False cancels the save."""
        return True

    def after_save(self) -> None:
        """Runs after the write is committed; cannot undo it."""

    # ------------------------------------------------------------------
    # Persistence

    @classmethod
    def get_entity_manager(cls, provider: Optional[PersistenceProvider] = None) -> PersistenceProvider:
        return provider if provider is not None else get_provider()

    def _log(self) -> LoggerAdapter:
        return LoggerAdapter(logger, {"record_class": type(self).__name__})

    def save(self, provider: Optional[PersistenceProvider] = None) -> bool:
        """Insert or update this record.

        Returns False when :meth:`before_save` or, for a new record,
        :meth:`before_create` vetoes the write. Database errors from the flush
        propagate to the caller.
        """
        if self.before_save() is False:
            self._log().debug("Save aborted by before_save", extra={"record_id": self.id})
            return False
        em = self.get_entity_manager(provider)

        if not self.is_new:
            em.merge(self)
        else:
            if self.before_create() is False:
                self._log().debug("Create aborted by before_create")
                return False
            if self.id is not None:
                # ids are generated by the database
                self.id = None
            em.persist(self)
        em.flush()

        self.after_save()
        return True

    def destroy(self, provider: Optional[PersistenceProvider] = None) -> None:
        em = self.get_entity_manager(provider)
        record_id = self.id
        em.remove(self)
        em.flush()
        self._log().debug("Removed record", extra={"record_id": record_id})

    # ------------------------------------------------------------------
    # Queries

    @classmethod
    def repository(
        cls: type[TRecord], provider: Optional[PersistenceProvider] = None
    ) -> RecordRepository[TRecord]:
        return RecordRepository(cls, cls.get_entity_manager(provider))

    @classmethod
    def factory(cls: type[TRecord]) -> TRecord:
        return cls()

    @classmethod
    def get_by_id(
        cls: type[TRecord], record_id: Any, provider: Optional[PersistenceProvider] = None
    ) -> TRecord | None | Literal[False]:
        """Record with primary key ``record_id``.

        ``False`` when the id is not a positive integer (no query is issued),
        ``None`` when no row matches.
        """
        if coerce_id(record_id) is None:
            return False
        return cls.repository(provider).get_by_id(record_id)

    @classmethod
    def get_or_fail(
        cls: type[TRecord], record_id: Any, provider: Optional[PersistenceProvider] = None
    ) -> TRecord:
        return cls.repository(provider).get_or_fail(record_id)

    @classmethod
    def load_by_ids(
        cls: type[TRecord], ids: Iterable[int], provider: Optional[PersistenceProvider] = None
    ) -> list[TRecord]:
        return cls.repository(provider).load_by_ids(ids)

    @classmethod
    def get_all(
        cls: type[TRecord],
        sort: Optional[SortSpec | str] = None,
        provider: Optional[PersistenceProvider] = None,
    ) -> list[TRecord]:
        return cls.repository(provider).get_all(sort)

    @classmethod
    def get_last(
        cls: type[TRecord], provider: Optional[PersistenceProvider] = None
    ) -> Optional[TRecord]:
        return cls.repository(provider).get_last()

    @classmethod
    def get_recent(
        cls: type[TRecord], num: Optional[int] = None, provider: Optional[PersistenceProvider] = None
    ) -> list[TRecord]:
        return cls.repository(provider).get_recent(num)
