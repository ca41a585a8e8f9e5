"""Enumeration of the health metric types accepted by the store."""

from enum import IntEnum


class MetricType(IntEnum):
    """Closed set of metric codes a reading can be recorded under."""

    PULSE = 1
    BLOOD_PRESSURE = 2
    BODY_TEMPERATURE = 3
    WEIGHT = 4
    BLOOD_GLUCOSE = 5


def is_valid_metric_type(code: int) -> bool:
    """Return True when ``code`` names a member of :class:`MetricType`."""
    try:
        MetricType(code)
    except ValueError:
        return False
    return True
