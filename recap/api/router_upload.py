"""
Upload endpoint: accept one reading-history export and make it the session library.
"""
from __future__ import annotations

import re
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from starlette.concurrency import run_in_threadpool

from recap.config import UPLOADS_FOLDER
from recap.data.loader import RecapInputError
from recap.data.store import LibraryStore
from recap.api.dependencies import get_store_or_empty
from recap.api.response_models import UploadResponse
from recap.api.router_meta import year_listing

router = APIRouter(prefix="/api", tags=["upload"])


def _safe_filename(filename: str) -> str:
    return re.sub(r"[^\w\-. ()]", "_", Path(filename).name)


@router.post("/upload", response_model=UploadResponse)
async def upload_export(
    file: UploadFile = File(...),
    store: LibraryStore = Depends(get_store_or_empty),
):
    """Parse an uploaded CSV/Excel export and replace the loaded library."""
    if not file.filename:
        raise HTTPException(400, "Missing filename")

    filename = _safe_filename(file.filename)
    content = await file.read()

    try:
        await run_in_threadpool(store.load_bytes, content, filename)
    except RecapInputError as exc:
        raise HTTPException(400, str(exc))

    # Keep a copy so the library survives a restart
    UPLOADS_FOLDER.mkdir(parents=True, exist_ok=True)
    (UPLOADS_FOLDER / filename).write_bytes(content)

    return UploadResponse(
        status="loaded",
        filename=filename,
        books=store.book_count(),
        years=year_listing(store),
        default_year=store.default_year(),
    )
