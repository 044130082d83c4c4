"""
Recap endpoints: compute a year's statistics, create + retrieve share links.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from recap.config import DEFAULT_READER_NAME
from recap.data.store import LibraryStore
from recap.api.dependencies import get_store
from recap.api.response_models import ShareCreateRequest, ShareResponse
from recap.api.share import create_share, get_share

router = APIRouter(prefix="/api/recap", tags=["recap"])


def _recap_payload(store: LibraryStore, year: Optional[int], name: Optional[str]) -> dict:
    if year is None:
        year = store.default_year()
    elif year not in store.available_years():
        raise HTTPException(404, f"No books read in {year}")
    return store.statistics(year=year, name=name or DEFAULT_READER_NAME).to_dict()


@router.get("")
def get_recap(
    year: Optional[int] = Query(None, description="Read-year (default: most recent)"),
    name: Optional[str] = Query(None, description="Display name on the recap"),
    store: LibraryStore = Depends(get_store),
):
    return _recap_payload(store, year, name)


@router.post("/share", response_model=ShareResponse)
def create_shared_recap(
    req: ShareCreateRequest,
    store: LibraryStore = Depends(get_store),
):
    """Create a shareable link by freezing the recap to a JSON snapshot."""
    data = _recap_payload(store, req.year, req.name)
    return ShareResponse(**create_share(data))


@router.get("/share/{share_id}")
def get_shared_recap(share_id: str):
    """Retrieve a previously shared recap."""
    payload = get_share(share_id)
    if payload is None:
        raise HTTPException(404, "Share not found or expired")
    return payload["data"]
