"""Store and caller-identity dependencies for FastAPI routes."""

from functools import lru_cache
from pathlib import Path
import os

from fastapi import Header, HTTPException, status

from backend.store import BaseMetricStore, DuckDBMetricStore, MetricStore, logger

DB_ENV_VAR = "HEALTH_METRICS_DB_PATH"
CALLER_HEADER = "X-Caller-Id"


@lru_cache(maxsize=1)
def get_db_path() -> Path | None:
    """Resolve the DuckDB path from the environment; ``None`` keeps state in memory."""
    env_override = os.environ.get(DB_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser()
    return None


@lru_cache(maxsize=1)
def get_metric_store() -> BaseMetricStore:
    """Return the process-wide metric store."""
    db_path = get_db_path()
    if db_path is None:
        return MetricStore()

    if not db_path.parent.exists():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=(
                f"Directory for DuckDB file {db_path} does not exist. "
                f"Set {DB_ENV_VAR} to override the location."
            ),
        )
    return DuckDBMetricStore(db_path)


def close_metric_store() -> None:
    """Close the cached store, if one was opened, and forget it."""
    if get_metric_store.cache_info().currsize:
        get_metric_store().close()
        logger.info("Closed metric store")
    get_metric_store.cache_clear()


def get_caller(
    caller_id: str = Header(..., alias=CALLER_HEADER, min_length=1),
) -> str:
    """Identity of the invoking party, set by the hosting environment."""
    return caller_id
