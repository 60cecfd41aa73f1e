# backend/jobly/db/session.py
from __future__ import annotations

from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from jobly.core.config import settings


def _ensure_sqlite_parent_dir(url: str) -> None:
    # sqlite:///./data/jobly.sqlite3 -> ./data
    if not url.startswith("sqlite:///") or url.endswith(":memory:"):
        return
    Path(url.replace("sqlite:///", "", 1)).parent.mkdir(parents=True, exist_ok=True)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # Needed so SQLite works in multi-threaded FastAPI
        connect_args = {"check_same_thread": False}
        _ensure_sqlite_parent_dir(url)

    engine = create_engine(
        url,
        pool_pre_ping=True,          # drops dead connections
        future=True,
        connect_args=connect_args,
    )

    # SQLite ignores REFERENCES unless asked per connection
    if url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


engine = make_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=Session,
    future=True,
)


# -------------------------------------------------------
# FastAPI dependency
# -------------------------------------------------------
def get_db() -> Generator[Session, None, None]:
    """
    Usage in routes:
        from jobly.db.session import get_db
        def endpoint(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
