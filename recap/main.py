"""
Reading Recap: FastAPI app factory with startup library loading.
"""
from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recap.config import BASE_FOLDER, UPLOADS_FOLDER, SHARES_FOLDER, SUPPORTED_EXTENSIONS
from recap.data.loader import RecapInputError
from recap.data.store import LibraryStore
from recap.api.dependencies import set_store
from recap.api.router_meta import router as meta_router
from recap.api.router_upload import router as upload_router
from recap.api.router_recap import router as recap_router


def _latest_upload():
    if not UPLOADS_FOLDER.exists():
        return None
    uploads = [p for p in UPLOADS_FOLDER.iterdir() if p.suffix.lower() in SUPPORTED_EXTENSIONS]
    return max(uploads, key=lambda p: p.stat().st_mtime, default=None)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Restore the most recent upload at startup."""
    for d in [UPLOADS_FOLDER, SHARES_FOLDER]:
        d.mkdir(parents=True, exist_ok=True)

    print(f"  RECAP_DATA_DIR = {os.environ.get('RECAP_DATA_DIR', '(not set)')}")
    print(f"  BASE_FOLDER = {BASE_FOLDER}")
    print(f"  UPLOADS_FOLDER = {UPLOADS_FOLDER}")

    store = LibraryStore()
    latest = _latest_upload()
    if latest is not None:
        try:
            store.load(latest)
        except RecapInputError as exc:
            print(f"  WARNING: could not restore {latest.name}: {exc}")
    set_store(store)

    if store.is_loaded:
        print(f"\nReading Recap ready: {store.book_count():,} books, "
              f"{len(store.available_years())} year(s)\n")
    else:
        print("\nReading Recap ready: no library yet. Upload an export via /api/upload.\n")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Reading Recap API",
        description="Yearly reading statistics from a Goodreads-style export",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(upload_router)
    app.include_router(recap_router)

    return app


app = create_app()
