"""
Shareable recap links: JSON snapshots with unique IDs.
"""
from __future__ import annotations

import json
import re
import uuid
from datetime import datetime, timedelta

from recap.config import SHARES_FOLDER, SHARE_EXPIRY_DAYS


def create_share(report_data: dict) -> dict:
    """Freeze a recap payload to a JSON file with a unique ID."""
    share_id = uuid.uuid4().hex[:12]
    created_at = datetime.now()
    expires_at = created_at + timedelta(days=SHARE_EXPIRY_DAYS)

    SHARES_FOLDER.mkdir(parents=True, exist_ok=True)
    payload = {
        "id": share_id,
        "created_at": created_at.isoformat(),
        "expires_at": expires_at.isoformat(),
        "data": report_data,
    }
    (SHARES_FOLDER / f"{share_id}.json").write_text(json.dumps(payload))

    return {
        "id": share_id,
        "url": f"/api/recap/share/{share_id}",
        "expires_at": expires_at.isoformat(),
        "year": report_data.get("year"),
    }


def get_share(share_id: str) -> dict | None:
    """Retrieve a shared recap by ID; expired snapshots are deleted."""
    if not re.fullmatch(r"[0-9a-f]{12}", share_id):
        return None
    share_path = SHARES_FOLDER / f"{share_id}.json"
    if not share_path.exists():
        return None

    payload = json.loads(share_path.read_text())

    expires = datetime.fromisoformat(payload["expires_at"])
    if datetime.now() > expires:
        share_path.unlink(missing_ok=True)
        return None

    return payload
