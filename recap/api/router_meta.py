"""
Meta endpoints: health, years.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from recap.data.store import LibraryStore
from recap.api.dependencies import get_store_or_empty
from recap.api.response_models import HealthResponse, YearCount, YearsResponse

router = APIRouter(prefix="/api", tags=["meta"])


def year_listing(store: LibraryStore) -> list[YearCount]:
    return [YearCount(year=year, books=count) for year, count in store.year_counts().items()]


@router.get("/health", response_model=HealthResponse)
def health(store: LibraryStore = Depends(get_store_or_empty)):
    return HealthResponse(
        status="ok",
        books=store.book_count(),
        years=len(store.available_years()),
        source=store.source_name or None,
    )


@router.get("/years", response_model=YearsResponse)
def list_years(store: LibraryStore = Depends(get_store_or_empty)):
    """Years with dated books, most recent first. Empty before any upload."""
    return YearsResponse(years=year_listing(store), default_year=store.default_year())
