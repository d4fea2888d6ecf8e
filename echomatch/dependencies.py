"""Common FastAPI dependency helpers for the seed routes.

Provides:
- get_store: request-scoped DocumentStore bound to the DB session
- get_clock: source of "now" for a seed run
- get_demo_keys: demo document keys (namespace + fixed ids)
- get_seed_user_uid: account targeted by the single-user endpoint

Tests override these through `app.dependency_overrides`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from echomatch import config
from echomatch.config import DemoKeys
from echomatch.database import get_db
from echomatch.store import DocumentStore

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def get_store(db: Session = Depends(get_db)) -> DocumentStore:
    return DocumentStore(db)


def get_clock() -> Clock:
    return _utcnow


def get_demo_keys() -> DemoKeys:
    return config.DEMO_KEYS


def get_seed_user_uid() -> str:
    return config.SEED_USER_UID


__all__ = ["Clock", "get_store", "get_clock", "get_demo_keys", "get_seed_user_uid"]
