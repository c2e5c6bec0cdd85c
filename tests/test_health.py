"""Tests for the /health endpoint and its probes."""
import pytest

from services import health_checks


@pytest.fixture
def storage_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(health_checks.config, "PHOTO_STORAGE_DIR", str(tmp_path))
    return tmp_path


def test_healthy_when_everything_is_up(client, storage_dir):
    res = client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["services"] == {"database": "up", "ai": "up", "storage": "up"}
    assert body["version"]
    assert body["uptime"] >= 0
    assert "response_time_ms" in body["metrics"]
    assert body["timestamp"].endswith("Z")


def test_degraded_without_ai_key(client, fake_llm, storage_dir):
    fake_llm.configured = False
    res = client.get("/health")
    assert res.status_code == 207
    assert res.json()["status"] == "degraded"
    assert res.json()["services"]["ai"] == "unknown"


def test_unhealthy_when_ai_is_down(client, fake_llm, storage_dir):
    fake_llm.reachable = False
    res = client.get("/health")
    assert res.status_code == 503
    assert res.json()["status"] == "unhealthy"


def test_unhealthy_when_storage_is_missing(client, tmp_path, monkeypatch):
    monkeypatch.setattr(health_checks.config, "PHOTO_STORAGE_DIR", str(tmp_path / "missing"))
    res = client.get("/health")
    assert res.status_code == 503
    assert res.json()["services"]["storage"] == "down"


def test_overall_status_rules():
    assert health_checks.overall_status({"a": "up", "b": "up"}) == "healthy"
    assert health_checks.overall_status({"a": "up", "b": "unknown"}) == "degraded"
    assert health_checks.overall_status({"a": "down", "b": "unknown"}) == "unhealthy"


def test_database_probe(db):
    assert health_checks.check_database(db) == "up"


def test_ai_probe_without_key():
    from services.llm_client import LLMClient
    assert health_checks.check_ai_service(LLMClient(api_key="")) == "unknown"
