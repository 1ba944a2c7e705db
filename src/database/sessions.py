"""Relational database setup."""

import logging
import threading
from contextlib import contextmanager, nullcontext
from typing import Callable, ContextManager, Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from models.base import Base
from settings import is_in_memory_dsn, settings

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]

# Sessions on a StaticPool engine share one sqlite3 connection, only one may run at a time
_static_pool_lock = threading.RLock()


def build_engine(dsn: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given DSN.
    In-memory SQLite keeps one connection shared across threads, so the Dash
    worker threads and the start-up seeding all see the same data. Sessions on
    it are serialized by `build_session_factory`.
    """
    if is_in_memory_dsn(dsn):
        return create_engine(
            url=dsn,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        url=dsn,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=1_800,
    )


def build_session_factory(engine: Engine) -> SessionFactory:
    """Wrap a sessionmaker bound to `engine` into a session lifecycle context manager."""
    local_session = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        class_=Session,
    )

    shared_connection = isinstance(engine.pool, StaticPool)

    @contextmanager
    def session_scope() -> Iterator[Session]:
        with _static_pool_lock if shared_connection else nullcontext():
            session = local_session()
            try:
                yield session
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                raise
            finally:
                session.close()

    return session_scope


engine = build_engine(settings.database.dsn, echo=settings.database.echo)

_session_scope = build_session_factory(engine)


@contextmanager
def get_sync_session() -> Iterator[Session]:
    """Start context manager for a complete session lifecycle.

    Example:
        with get_sync_session() as session:
            do_stuff()

    Yields
    ------
    Session
        SQLAlchemy Session object.
    """
    with _session_scope() as session:
        yield session


def init_database(bind: Engine | None = None) -> None:
    """Create all tables on the given engine (defaults to the configured one)."""
    bind = bind or engine
    Base.metadata.create_all(bind)
    logger.info("Database tables created on %s", bind.url)
