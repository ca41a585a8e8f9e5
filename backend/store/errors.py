"""Errors raised by the metric store."""

ERR_INVALID_METRIC_TYPE = 101


class MetricStoreError(Exception):
    """Base class for store rejections; ``code`` is the wire error code."""

    code: int = 0


class InvalidMetricTypeError(MetricStoreError):
    """Raised when a write names a metric type outside :class:`MetricType`."""

    code = ERR_INVALID_METRIC_TYPE

    def __init__(self, metric_type: int) -> None:
        self.metric_type = metric_type
        super().__init__(f"Invalid metric type: {metric_type}")
