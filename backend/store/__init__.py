"""Storage for the latest health measurement per owner and metric type."""

import logging

logger = logging.getLogger("backend.store")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

from .errors import InvalidMetricTypeError, MetricStoreError  # noqa: E402
from .metric_store import BaseMetricStore, DuckDBMetricStore, MetricStore  # noqa: E402

__all__ = [
    "BaseMetricStore",
    "DuckDBMetricStore",
    "InvalidMetricTypeError",
    "MetricStore",
    "MetricStoreError",
    "logger",
]
