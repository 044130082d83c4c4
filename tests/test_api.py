"""API tests using FastAPI's TestClient (startup hooks are not run)."""
import json

import pytest
from fastapi.testclient import TestClient

import recap.api.router_upload as router_upload
import recap.api.share as share
from recap.api.dependencies import set_store
from recap.data.store import LibraryStore
from recap.main import create_app


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(router_upload, "UPLOADS_FOLDER", tmp_path / "uploads")
    monkeypatch.setattr(share, "SHARES_FOLDER", tmp_path / "shares")
    set_store(LibraryStore())
    return TestClient(create_app())


@pytest.fixture
def loaded_client(client, goodreads_csv):
    resp = client.post(
        "/api/upload",
        files={"file": ("goodreads_library_export.csv", goodreads_csv.encode("utf-8"), "text/csv")},
    )
    assert resp.status_code == 200
    return client


def test_health_before_upload(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["books"] == 0


def test_recap_requires_library(client):
    assert client.get("/api/recap").status_code == 409


def test_upload_returns_years(client, goodreads_csv, tmp_path):
    resp = client.post(
        "/api/upload",
        files={"file": ("goodreads_library_export.csv", goodreads_csv.encode("utf-8"), "text/csv")},
    )
    body = resp.json()
    assert resp.status_code == 200
    assert body["books"] == 5
    assert body["default_year"] == 2023
    assert body["years"] == [{"year": 2023, "books": 3}, {"year": 2022, "books": 1}]
    assert (tmp_path / "uploads" / "goodreads_library_export.csv").exists()


def test_upload_rejects_unsupported_format(client):
    resp = client.post("/api/upload", files={"file": ("library.txt", b"Title\nDune\n", "text/plain")})
    assert resp.status_code == 400
    assert "Please upload CSV or Excel file" in resp.json()["detail"]


def test_upload_rejects_export_without_dates(client):
    resp = client.post(
        "/api/upload",
        files={"file": ("export.csv", b"Title,Date Read\nDune,\n", "text/csv")},
    )
    assert resp.status_code == 400
    assert "Date Read" in resp.json()["detail"]


def test_years_endpoint(loaded_client):
    body = loaded_client.get("/api/years").json()
    assert body["default_year"] == 2023
    assert [y["year"] for y in body["years"]] == [2023, 2022]


def test_recap_default_and_named(loaded_client):
    data = loaded_client.get("/api/recap", params={"name": "Sam"}).json()
    assert data["name"] == "Sam"
    assert data["year"] == 2023
    assert data["totalBooks"] == 3
    assert data["oldestBookTitle"] == "The Republic"

    older = loaded_client.get("/api/recap", params={"year": 2022}).json()
    assert older["totalBooks"] == 1
    assert older["name"] == "Reader"


def test_recap_unknown_year(loaded_client):
    assert loaded_client.get("/api/recap", params={"year": 1999}).status_code == 404


def test_share_roundtrip(loaded_client, tmp_path):
    resp = loaded_client.post("/api/recap/share", json={"year": 2023, "name": "Sam"})
    assert resp.status_code == 200
    created = resp.json()
    assert created["url"] == f"/api/recap/share/{created['id']}"
    assert (tmp_path / "shares" / f"{created['id']}.json").exists()

    shared = loaded_client.get(created["url"]).json()
    assert shared["name"] == "Sam"
    assert shared["totalBooks"] == 3


def test_share_expired_or_missing(loaded_client, tmp_path):
    assert loaded_client.get("/api/recap/share/doesnotexist").status_code == 404

    created = loaded_client.post("/api/recap/share", json={}).json()
    path = tmp_path / "shares" / f"{created['id']}.json"
    payload = json.loads(path.read_text())
    payload["expires_at"] = "2000-01-01T00:00:00"
    path.write_text(json.dumps(payload))

    assert loaded_client.get(created["url"]).status_code == 404
    assert not path.exists()


def test_upload_parses_off_the_event_loop(client, goodreads_csv, monkeypatch):
    calls = []

    async def fake_threadpool(func, *args):
        calls.append(func.__name__)
        return func(*args)

    monkeypatch.setattr(router_upload, "run_in_threadpool", fake_threadpool)
    resp = client.post(
        "/api/upload",
        files={"file": ("goodreads_library_export.csv", goodreads_csv.encode("utf-8"), "text/csv")},
    )
    assert resp.status_code == 200
    assert calls == ["load_bytes"]
