"""Engine and session factory configuration."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from recordmodel.core import get_logger, settings
from recordmodel.db.base import Base

logger = get_logger(__name__)


def build_engine(url: str | None = None, echo: bool | None = None) -> Engine:
    """Create an engine for ``url`` (defaults to ``settings.database_url``)."""
    url = url or settings.database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        echo=settings.sql_echo if echo is None else echo,
        connect_args=connect_args,
        future=True,
    )


engine = build_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """Yield a session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create tables for every imported record class (safe to call repeatedly)."""
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Created tables", extra={"tables": sorted(Base.metadata.tables)})
