"""SQLAlchemy engine and sessions backing the document store.

One engine per process, built at import from DATABASE_URL (local SQLite file
`echomatch.db` when unset). Request handlers get their own session via `get_db`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{(PROJECT_ROOT / 'echomatch.db').as_posix()}")

if DATABASE_URL.startswith("sqlite"):
    # uvicorn serves requests from worker threads
    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False}, future=True)
else:
    engine = create_engine(DATABASE_URL, pool_pre_ping=True, future=True)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, class_=Session)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the `documents` and `identity_accounts` tables if missing."""
    import echomatch.models  # noqa: F401  registers the models on Base.metadata

    logger.info("Creating tables on %s", engine.url.render_as_string(hide_password=True))
    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("Failed to initialize database")
        raise


__all__ = ["Base", "engine", "SessionLocal", "get_db", "init_db"]
