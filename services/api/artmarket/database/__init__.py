from .base import Base
from .engine import build_engine
from .session import build_session_factory, get_db

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "get_db",
]
