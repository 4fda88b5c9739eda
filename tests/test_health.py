from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import app

c = TestClient(app)
PREFIX = settings.api_prefix_normalized


def test_ping():
    r = c.get(f"{PREFIX}/ping")
    assert r.status_code == 200
    assert r.json() == {"message": "pong"}


def test_health_reports_db_not_ready_without_startup():
    r = c.get(f"{PREFIX}/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert r.json()["db_ready"] is False


def test_request_id_generated_when_absent():
    r = c.get(f"{PREFIX}/ping")
    assert len(r.headers["X-Request-Id"]) > 10
