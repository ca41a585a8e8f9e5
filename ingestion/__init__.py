"""Bulk import utilities for health metric readings."""

import logging
from dataclasses import dataclass, field
from typing import Dict

logger = logging.getLogger("ingestion")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@dataclass
class ImportMetrics:
    """Track row counts while replaying CSV readings into a store."""

    csv_rows_processed: int = 0
    readings_accepted: int = 0
    readings_rejected: int = 0
    rejected_by_reason: Dict[str, int] = field(default_factory=dict)

    def add_rows(self, count: int) -> None:
        self.csv_rows_processed += count
        logger.debug("Added %s CSV rows; total=%s", count, self.csv_rows_processed)

    def mark_accepted(self) -> None:
        self.readings_accepted += 1

    def mark_rejected(self, reason: str) -> None:
        self.readings_rejected += 1
        self.rejected_by_reason[reason] = self.rejected_by_reason.get(reason, 0) + 1
        logger.debug("Rejected reading (%s); total=%s", reason, self.readings_rejected)


__all__ = ["ImportMetrics", "logger"]
