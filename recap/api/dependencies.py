"""
FastAPI dependencies: LibraryStore singleton.
"""
from __future__ import annotations

from fastapi import HTTPException

from recap.data.store import LibraryStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: LibraryStore | None = None


def set_store(store: LibraryStore) -> None:
    global _store
    _store = store


def get_store_or_empty() -> LibraryStore:
    """Return the store even if no export has been uploaded (for health/upload)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


def get_store() -> LibraryStore:
    store = get_store_or_empty()
    if not store.is_loaded:
        raise HTTPException(409, "No reading history loaded. Upload your export first.")
    return store
