"""System routes: health and store overview."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from echomatch.dependencies import get_store
from echomatch.seed import COLLECTION_ORDER
from echomatch.store import DocumentStore

router = APIRouter(prefix="/api", tags=["System"])


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/stats")
async def stats(store: DocumentStore = Depends(get_store)) -> dict:
    """Document counts per seeded collection."""
    return {"data": {name: store.count(name) for name in COLLECTION_ORDER}}
