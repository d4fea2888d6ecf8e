"""Idempotent upserts against the document store."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

from echomatch.store import DocumentStore

logger = logging.getLogger(__name__)


class WriteMode(str, Enum):
    CREATE_IF_ABSENT = "create_if_absent"
    MERGE = "merge"


class UpsertOutcome(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    MERGED = "merged"


def upsert(
    store: DocumentStore,
    collection: str,
    doc_id: str,
    payload: Mapping[str, Any],
    mode: WriteMode = WriteMode.CREATE_IF_ABSENT,
) -> UpsertOutcome:
    """Write `payload` at `collection/doc_id` according to `mode`.

    CREATE_IF_ABSENT writes only when no document exists at the key, so
    repeating the call never changes an existing record. MERGE always writes,
    layering the payload fields over any existing document.

    One read and at most one write per call; `StoreUnavailable` propagates.
    """
    existing = store.get(collection, doc_id)

    if mode is WriteMode.MERGE:
        store.set(collection, doc_id, payload, merge=True)
        return UpsertOutcome.CREATED if existing is None else UpsertOutcome.MERGED

    if existing is not None:
        logger.debug("upsert: %s/%s already present, skipping", collection, doc_id)
        return UpsertOutcome.SKIPPED

    store.set(collection, doc_id, payload)
    return UpsertOutcome.CREATED


__all__ = ["WriteMode", "UpsertOutcome", "upsert"]
