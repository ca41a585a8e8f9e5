"""Latest-only metric store with in-memory and DuckDB backends."""

from abc import ABC, abstractmethod
from pathlib import Path
import threading

import duckdb

from backend.models.measurement import LatestMeasurement, Measurement
from backend.models.metric_type import is_valid_metric_type

from . import logger
from .errors import InvalidMetricTypeError

MeasurementKey = tuple[str, int]

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS measurements (
        owner VARCHAR NOT NULL,
        metric_type UINTEGER NOT NULL,
        value UHUGEINT NOT NULL,
        recorded_at UHUGEINT NOT NULL,
        notes VARCHAR,
        PRIMARY KEY (owner, metric_type)
    )
"""


class BaseMetricStore(ABC):
    """Keep the most recent reading for each (owner, metric type) pair.

    Writes are validated before anything is stored: a metric type outside
    :class:`~backend.models.metric_type.MetricType` raises
    :class:`InvalidMetricTypeError` and leaves the store untouched. A valid write
    replaces whatever was stored for the same key. Reads never fail; a key that
    was never written yields ``None``.

    Subclasses provide the keyed storage through ``_upsert`` and ``_lookup``.
    """

    def record_health_metric(
        self,
        caller: str,
        metric_type: int,
        value: int,
        timestamp: int,
        notes: str | None = None,
    ) -> bool:
        """Record a reading for ``caller``, replacing the previous one.

        Args:
            caller: Identity of the party recording the value; becomes the owner.
            metric_type: Metric type code.
            value: Unsigned magnitude of the reading.
            timestamp: Unsigned timestamp supplied by the caller.
            notes: Optional annotation.

        Returns:
            ``True`` once the reading is stored.

        Raises:
            InvalidMetricTypeError: ``metric_type`` is not an accepted code.
            pydantic.ValidationError: ``value`` or ``timestamp`` is negative or too large.
        """
        if not is_valid_metric_type(metric_type):
            logger.warning("Rejected metric type %s from %s", metric_type, caller)
            raise InvalidMetricTypeError(metric_type)

        measurement = Measurement(
            owner=caller,
            metric_type=metric_type,
            value=value,
            timestamp=timestamp,
            notes=notes,
        )
        self._upsert(measurement)
        logger.debug(
            "Recorded metric %s=%s for %s at %s", metric_type, value, caller, timestamp
        )
        return True

    def get_latest_measurement(self, owner: str, metric_type: int) -> LatestMeasurement | None:
        """Return ``{value, notes}`` of the latest reading, or ``None``."""
        # Nothing can be stored under an unknown code.
        if not is_valid_metric_type(metric_type):
            return None
        return self._lookup(owner, metric_type)

    @abstractmethod
    def _upsert(self, measurement: Measurement) -> None:
        ...

    @abstractmethod
    def _lookup(self, owner: str, metric_type: int) -> LatestMeasurement | None:
        ...

    def close(self) -> None:
        """Release backend resources."""


class MetricStore(BaseMetricStore):
    """Process-wide in-memory store backed by a plain dict."""

    def __init__(self) -> None:
        self._measurements: dict[MeasurementKey, Measurement] = {}

    def _upsert(self, measurement: Measurement) -> None:
        self._measurements[(measurement.owner, measurement.metric_type)] = measurement

    def _lookup(self, owner: str, metric_type: int) -> LatestMeasurement | None:
        measurement = self._measurements.get((owner, metric_type))
        return measurement.to_latest() if measurement else None


class DuckDBMetricStore(BaseMetricStore):
    """Metric store persisted to a DuckDB database file.

    The connection is shared by every thread using the store, so each
    execute-and-fetch runs under ``_lock``.
    """

    def __init__(self, db_path: Path | str = ":memory:") -> None:
        self.db_path = db_path
        self._lock = threading.Lock()
        self._connection = duckdb.connect(str(db_path))
        self._connection.execute(SCHEMA_SQL)
        logger.info("Opened metric store at %s", db_path)

    def _upsert(self, measurement: Measurement) -> None:
        # Unsigned 128-bit values are bound as text; Python ints above 2**64 do
        # not bind directly.
        with self._lock:
            self._connection.execute(
                "INSERT OR REPLACE INTO measurements "
                "(owner, metric_type, value, recorded_at, notes) "
                "VALUES (?, ?, CAST(? AS UHUGEINT), CAST(? AS UHUGEINT), ?)",
                [
                    measurement.owner,
                    measurement.metric_type,
                    str(measurement.value),
                    str(measurement.timestamp),
                    measurement.notes,
                ],
            )

    def _lookup(self, owner: str, metric_type: int) -> LatestMeasurement | None:
        with self._lock:
            row = self._connection.execute(
                "SELECT CAST(value AS VARCHAR), notes FROM measurements "
                "WHERE owner = ? AND metric_type = ?",
                [owner, metric_type],
            ).fetchone()
        if row is None:
            return None
        return LatestMeasurement(value=int(row[0]), notes=row[1])

    def close(self) -> None:
        with self._lock:
            self._connection.close()
