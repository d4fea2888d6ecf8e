"""Document store: named collections of JSON documents keyed by string id.

The store sits on top of a SQLAlchemy session. Every `set` commits on its own,
so a failure halfway through a seed run leaves the earlier writes in place.
Any database error surfaces as `StoreUnavailable`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from echomatch.errors import StoreUnavailable
from echomatch.models import DocumentModel, utcnow

logger = logging.getLogger(__name__)


class DocumentRef:
    """Handle on a single document path, `collection/doc_id`."""

    def __init__(self, store: "DocumentStore", collection: str, doc_id: str) -> None:
        self.store = store
        self.collection = collection
        self.doc_id = doc_id

    @property
    def path(self) -> str:
        return f"{self.collection}/{self.doc_id}"

    def get(self) -> Optional[Dict[str, Any]]:
        return self.store.get(self.collection, self.doc_id)

    def set(self, data: Mapping[str, Any], merge: bool = False) -> None:
        self.store.set(self.collection, self.doc_id, data, merge=merge)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"<DocumentRef {self.path}>"


class DocumentStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def document(self, collection: str, doc_id: str) -> DocumentRef:
        return DocumentRef(self, collection, doc_id)

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return a copy of the stored document, or None when absent."""
        try:
            row = self.db.get(DocumentModel, (collection, doc_id))
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreUnavailable(str(exc)) from exc
        if row is None:
            return None
        return dict(row.data)

    def set(self, collection: str, doc_id: str, data: Mapping[str, Any], merge: bool = False) -> None:
        """Write `data` at `collection/doc_id`.

        Without `merge` the stored document is replaced. With `merge` the given
        fields are layered over whatever is already stored.
        """
        try:
            row = self.db.get(DocumentModel, (collection, doc_id))
            if row is None:
                self._insert_or_replace(collection, doc_id, dict(data))
            elif merge:
                row.data = {**row.data, **data}
            else:
                row.data = dict(data)
            self.db.commit()
        except SQLAlchemyError as exc:
            self._rollback()
            logger.error("Write to %s/%s failed: %s", collection, doc_id, exc)
            raise StoreUnavailable(str(exc)) from exc

    def _insert_or_replace(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        # A concurrent writer may have created the row since our read; the later write wins
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = postgresql_insert(DocumentModel)
        elif dialect == "sqlite":
            stmt = sqlite_insert(DocumentModel)
        else:
            self.db.merge(DocumentModel(collection=collection, doc_id=doc_id, data=data))
            return
        stmt = stmt.values(collection=collection, doc_id=doc_id, data=data)
        stmt = stmt.on_conflict_do_update(
            index_elements=[DocumentModel.collection, DocumentModel.doc_id],
            set_={"data": stmt.excluded.data, "update_time": utcnow()},
        )
        self.db.execute(stmt)

    def list(self, collection: str) -> List[Dict[str, Any]]:
        try:
            rows = self.db.scalars(
                select(DocumentModel).where(DocumentModel.collection == collection).order_by(DocumentModel.doc_id)
            ).all()
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreUnavailable(str(exc)) from exc
        return [dict(r.data) for r in rows]

    def count(self, collection: str) -> int:
        try:
            return self.db.scalar(
                select(func.count()).select_from(DocumentModel).where(DocumentModel.collection == collection)
            ) or 0
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreUnavailable(str(exc)) from exc

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback after store failure also failed")


__all__ = ["DocumentRef", "DocumentStore"]
