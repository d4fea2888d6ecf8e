"""SQLAlchemy models for the EchoMatch seeder.

Models implemented:
- DocumentModel (every seeded collection shares one table, keyed by collection + id)
- IdentityAccountModel (accounts known to the identity provider)

Uses SQLAlchemy 2.0 typing (Mapped, mapped_column) and the declarative Base from `echomatch.database`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from echomatch.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentModel(Base):
    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(64), primary_key=True)
    doc_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    create_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    update_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @property
    def path(self) -> str:
        return f"{self.collection}/{self.doc_id}"

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"<Document {self.path}>"


class IdentityAccountModel(Base):
    __tablename__ = "identity_accounts"

    uid: Mapped[str] = mapped_column(String(128), primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    disabled: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"<IdentityAccount uid={self.uid} email={self.email}>"


__all__ = ["DocumentModel", "IdentityAccountModel"]
