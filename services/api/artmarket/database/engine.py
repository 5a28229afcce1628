from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import URL

from artmarket.config import Settings


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key enforcement in SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _sqlite_engine(url: str, **kwargs) -> Engine:
    engine = create_engine(
        url,
        connect_args={"check_same_thread": False},
        echo=False,
        **kwargs,
    )
    event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


def build_engine(settings: Settings) -> Engine:
    """Create the database engine described by ``settings``."""
    # SQLite-specific settings
    if settings.database_url and settings.database_url.startswith("sqlite"):
        return _sqlite_engine(settings.database_url)

    # PostgreSQL - use separate params to handle special chars in password
    if settings.db_host:
        url = URL.create(
            drivername="postgresql",
            username=settings.db_user,
            password=settings.db_password,  # SQLAlchemy handles encoding
            host=settings.db_host,
            port=settings.db_port,
            database=settings.db_name,
        )
    elif settings.database_url:
        url = settings.database_url
    else:
        # Default to SQLite
        return _sqlite_engine("sqlite:///./local.db")

    # PostgreSQL settings
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        echo=False,
    )
