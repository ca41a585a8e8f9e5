import pytest
from fastapi.testclient import TestClient

from backend.api.app import app
from backend.db.deps import get_db_path, get_metric_store
from backend.store import DuckDBMetricStore, MetricStore


@pytest.fixture(params=["memory", "duckdb"])
def store(request, tmp_path):
    """Each store backend, fresh per test."""
    if request.param == "memory":
        backend = MetricStore()
    else:
        backend = DuckDBMetricStore(tmp_path / "metrics.duckdb")
    yield backend
    backend.close()


@pytest.fixture
def client():
    backend = MetricStore()
    app.dependency_overrides[get_metric_store] = lambda: backend
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def clear_store_cache():
    """Forget cached path/store resolution around tests that change the environment."""
    get_db_path.cache_clear()
    get_metric_store.cache_clear()
    yield
    get_db_path.cache_clear()
    get_metric_store.cache_clear()
