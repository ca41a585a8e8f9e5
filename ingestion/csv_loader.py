"""CSV ingestion of health metric readings."""

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from pydantic import ValidationError

from backend.models.metric_type import MetricType
from backend.store import BaseMetricStore, InvalidMetricTypeError

from . import ImportMetrics, logger

REQUIRED_COLUMNS = ("owner", "metric_type", "value", "timestamp")


def normalize_header(header: str) -> str:
    """Normalize a CSV header by lower-casing and replacing whitespace with underscores."""

    return "_".join(header.strip().lower().split())


def parse_metric_type(raw: str) -> int:
    """Accept either a numeric code or a :class:`MetricType` name such as ``pulse``."""
    text = raw.strip()
    if text.isdigit():
        return int(text)
    try:
        return MetricType[text.upper()].value
    except KeyError:
        raise ValueError(f"Unknown metric type: {raw!r}") from None


def load_csv_readings(
    csv_path: Path,
    metrics: ImportMetrics | None = None,
) -> Tuple[List[Dict[str, str]], Dict[str, str]]:
    """Load a readings CSV and normalize its headers.

    Args:
        csv_path: Path to the CSV file.
        metrics: Optional metrics collector.

    Returns:
        A tuple containing the normalized rows and a field map relating
        normalized headers back to their original names.

    Raises:
        ValueError: The file is missing one of ``REQUIRED_COLUMNS``.
    """

    records: List[Dict[str, str]] = []

    logger.info("Loading CSV file: %s", csv_path)
    with csv_path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        field_map = {normalize_header(h): h for h in reader.fieldnames or []}
        missing = [column for column in REQUIRED_COLUMNS if column not in field_map]
        if missing:
            raise ValueError(f"{csv_path} is missing columns: {', '.join(missing)}")
        for row in reader:
            records.append(
                {
                    normalize_header(key): value.strip() if isinstance(value, str) else value
                    for key, value in row.items()
                }
            )

    logger.info("Processed %s rows from %s", len(records), csv_path)
    if metrics:
        metrics.add_rows(len(records))
    return records, field_map


def import_readings(
    store: BaseMetricStore,
    records: Iterable[Dict[str, str]],
    metrics: ImportMetrics | None = None,
) -> ImportMetrics:
    """Replay rows through ``store.record_health_metric`` in file order.

    Later rows for the same owner and metric type replace earlier ones. Rows that
    the store rejects, or whose numeric cells do not parse, are counted and skipped.
    """
    metrics = metrics or ImportMetrics()
    for line_no, record in enumerate(records, start=2):
        try:
            store.record_health_metric(
                record["owner"],
                parse_metric_type(record["metric_type"]),
                int(record["value"]),
                int(record["timestamp"]),
                record.get("notes") or None,
            )
        except InvalidMetricTypeError as exc:
            logger.warning("Line %s: %s", line_no, exc)
            metrics.mark_rejected("invalid_metric_type")
            continue
        except (ValueError, ValidationError) as exc:
            logger.warning("Line %s: malformed reading: %s", line_no, exc)
            metrics.mark_rejected("malformed")
            continue
        metrics.mark_accepted()

    logger.info(
        "Imported %s readings, rejected %s",
        metrics.readings_accepted,
        metrics.readings_rejected,
    )
    return metrics
