"""Database package: engine, session, base."""

from gymlog.db.session import async_session_maker, get_db, init_models, session_scope

__all__ = ["async_session_maker", "get_db", "init_models", "session_scope"]
