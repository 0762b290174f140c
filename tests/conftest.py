import pytest
from fastapi.testclient import TestClient

from checklist_api import db as api_db
from checklist_api.main import create_app
from checklist_api.settings import reset_settings
from checklist_app.services import build_services

TOKEN = "test-secret"


@pytest.fixture
def api(tmp_path, monkeypatch):
    monkeypatch.setenv("BACKEND_SESSION_SECRET", TOKEN)
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    monkeypatch.setenv("IMAGE_DIR", str(tmp_path / "images"))
    monkeypatch.setenv("APP_TIMEZONE", "Asia/Jakarta")
    reset_settings()
    monkeypatch.setattr(api_db, "_engine", None)
    monkeypatch.setattr(api_db, "_session_factory", None)
    with TestClient(create_app()) as client:
        client.headers.update({"X-Backend-Token": TOKEN})
        yield client
    reset_settings()


@pytest.fixture
def services(api, tmp_path):
    return build_services(
        "http://testserver",
        TOKEN,
        "Asia/Jakarta",
        tmp_path / "session.json",
        http_session=api,
        start_scheduler=False,
    )
