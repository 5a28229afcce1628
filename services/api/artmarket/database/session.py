"""Database session management."""

from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to ``engine``."""
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def get_db(request: Request) -> Generator[Session, Any, None]:
    """
    FastAPI dependency that yields a database session.

    The session factory is built once by ``create_app`` and stored on
    ``app.state``.

    Usage:
        @router.get("/show")
        def show(db: Session = Depends(get_db)):
            ...
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
