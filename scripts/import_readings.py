#!/usr/bin/env python3
"""Import health metric readings from CSV files into a DuckDB metric store.

Each CSV needs ``owner``, ``metric_type``, ``value`` and ``timestamp`` columns
and may carry ``notes``. Rows are replayed in file order, so the last row for an
owner and metric type is the one that remains stored.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from backend.db.deps import DB_ENV_VAR
from backend.store import DuckDBMetricStore
from ingestion import ImportMetrics
from ingestion.csv_loader import import_readings, load_csv_readings

DEFAULT_DB_PATH = Path("data/health_metrics.duckdb")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Import health metric readings into DuckDB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "csv_files",
        nargs="+",
        type=Path,
        help="CSV files with owner, metric_type, value, timestamp[, notes] columns",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help=f"DuckDB file to write (default: ${DB_ENV_VAR} or {DEFAULT_DB_PATH})",
    )
    return parser


def resolve_db_path(cli_value: Path | None) -> Path:
    if cli_value:
        return cli_value.expanduser()
    env_value = os.environ.get(DB_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()
    return DEFAULT_DB_PATH


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    db_path = resolve_db_path(args.db)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    metrics = ImportMetrics()
    store = DuckDBMetricStore(db_path)
    try:
        for csv_path in args.csv_files:
            try:
                records, _ = load_csv_readings(csv_path, metrics=metrics)
            except ValueError as exc:
                print(f"Skipping {csv_path}: {exc}", file=sys.stderr)
                continue
            import_readings(store, records, metrics)
    finally:
        store.close()

    print(f"Rows read: {metrics.csv_rows_processed}")
    print(f"Accepted: {metrics.readings_accepted}")
    print(f"Rejected: {metrics.readings_rejected}")
    for reason, count in sorted(metrics.rejected_by_reason.items()):
        print(f"  {reason}: {count}")
    return 0 if metrics.readings_rejected == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
