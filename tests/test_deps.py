from pathlib import Path

from fastapi.testclient import TestClient

from backend.api.app import app
from backend.db.deps import DB_ENV_VAR, close_metric_store, get_db_path, get_metric_store
from backend.store import DuckDBMetricStore, MetricStore


def test_db_path_unset_uses_memory_store(monkeypatch, clear_store_cache):
    monkeypatch.delenv(DB_ENV_VAR, raising=False)

    assert get_db_path() is None
    assert type(get_metric_store()) is MetricStore


def test_db_path_from_environment(monkeypatch, clear_store_cache, tmp_path):
    db_path = tmp_path / "metrics.duckdb"
    monkeypatch.setenv(DB_ENV_VAR, str(db_path))

    assert get_db_path() == db_path
    store = get_metric_store()
    assert isinstance(store, DuckDBMetricStore)
    assert Path(store.db_path) == db_path
    close_metric_store()


def test_missing_db_directory_returns_503(monkeypatch, clear_store_cache, tmp_path):
    monkeypatch.setenv(DB_ENV_VAR, str(tmp_path / "missing" / "metrics.duckdb"))

    with TestClient(app) as client:
        response = client.get("/metrics/alice/1")

    assert response.status_code == 503
    assert DB_ENV_VAR in response.json()["detail"]


def test_api_against_duckdb_backend(monkeypatch, clear_store_cache, tmp_path):
    db_path = tmp_path / "metrics.duckdb"
    monkeypatch.setenv(DB_ENV_VAR, str(db_path))

    with TestClient(app) as client:
        response = client.post(
            "/metrics/",
            json={"metric_type": 1, "value": 75, "timestamp": 1, "notes": "Morning reading"},
            headers={"X-Caller-Id": "alice"},
        )
        assert response.status_code == 200
        response = client.post(
            "/metrics/",
            json={"metric_type": 99, "value": 75, "timestamp": 1},
            headers={"X-Caller-Id": "alice"},
        )
        assert response.json()["code"] == 101

    # Shutdown closed the cached store; the reading survives in the file.
    assert get_metric_store.cache_info().currsize == 0
    reopened = DuckDBMetricStore(db_path)
    try:
        latest = reopened.get_latest_measurement("alice", 1)
    finally:
        reopened.close()
    assert latest.value == 75
    assert latest.notes == "Morning reading"
