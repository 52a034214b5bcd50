"""Database utilities - engine and sessions."""

from src.crm.core.db.engine import dispose_engine, get_engine
from src.crm.core.db.session import create_all, get_session

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    # Session
    "create_all",
    "get_session",
]
