"""Process-wide access to the active persistence provider."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Optional

from sqlalchemy.orm import Session

from recordmodel.core import get_logger
from recordmodel.db.provider import PersistenceProvider
from recordmodel.db.session import SessionLocal
from recordmodel.domain.exceptions import ProviderNotConfiguredError

logger = get_logger(__name__)


class ConnectionSource:
    """Hands out the provider bound for the current request scope.

    Callers bind a provider with :meth:`provider_scope` (or the lower level
    :meth:`bind`/:meth:`unbind` pair); record classes look it up through
    :meth:`get_provider` on every call and never hold on to it.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self.session_factory = session_factory
        self._current: ContextVar[Optional[PersistenceProvider]] = ContextVar(
            f"recordmodel_provider_{id(self)}", default=None
        )

    def get_provider(self) -> PersistenceProvider:
        provider = self._current.get()
        if provider is None:
            raise ProviderNotConfiguredError(
                "No persistence provider is bound; wrap the call in provider_scope()"
            )
        return provider

    def bind(self, provider: PersistenceProvider) -> Token:
        return self._current.set(provider)

    def unbind(self, token: Token) -> None:
        self._current.reset(token)

    @contextmanager
    def provider_scope(
        self,
        session: Optional[Session] = None,
        commit_on_flush: Optional[bool] = None,
    ) -> Iterator[PersistenceProvider]:
        """Bind a provider for the duration of the block.

        A session opened here is rolled back on error and closed on exit; a
        session passed in by the caller is left open.
        """
        owns_session = session is None
        if session is None:
            session = self.session_factory()
        provider = PersistenceProvider(session, commit_on_flush=commit_on_flush)
        token = self.bind(provider)
        try:
            yield provider
        except Exception:
            if owns_session:
                logger.warning("Rolling back session after error", exc_info=True)
                session.rollback()
            raise
        finally:
            self.unbind(token)
            if owns_session:
                session.close()


connection_source = ConnectionSource(SessionLocal)


def get_provider() -> PersistenceProvider:
    """Provider bound on the default connection source."""
    return connection_source.get_provider()


def provider_scope(
    session: Optional[Session] = None, commit_on_flush: Optional[bool] = None
):
    return connection_source.provider_scope(session=session, commit_on_flush=commit_on_flush)
