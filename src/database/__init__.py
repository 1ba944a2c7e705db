from database.sessions import (
    SessionFactory,
    build_engine,
    build_session_factory,
    get_sync_session,
    init_database,
)

__all__ = [
    "SessionFactory",
    "build_engine",
    "build_session_factory",
    "get_sync_session",
    "init_database",
]
