"""Database package with engine and session management."""

from order_numbering.db.session import async_session_maker, create_tables, dispose_engine, engine, get_session

__all__ = [
    "async_session_maker",
    "create_tables",
    "dispose_engine",
    "engine",
    "get_session",
]
