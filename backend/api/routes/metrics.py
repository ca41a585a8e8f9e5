"""API routes for recording and reading health metrics."""

from fastapi import APIRouter, Depends, Path

from backend.db.deps import get_caller, get_metric_store
from backend.models.measurement import (
    LatestMeasurementResponse,
    MetricTypeInfo,
    RecordMetricRequest,
    RecordMetricResponse,
)
from backend.models.metric_type import MetricType
from backend.store import BaseMetricStore

router = APIRouter()


@router.get("/types", response_model=list[MetricTypeInfo])
def list_metric_types() -> list[MetricTypeInfo]:
    """Return the metric type codes accepted by the store."""
    return [MetricTypeInfo(code=member.value, name=member.name) for member in MetricType]


@router.post("/", response_model=RecordMetricResponse)
def record_health_metric(
    payload: RecordMetricRequest,
    caller: str = Depends(get_caller),
    store: BaseMetricStore = Depends(get_metric_store),
) -> RecordMetricResponse:
    """Record a reading for the calling party, replacing its previous one.

    An unknown ``metric_type`` is rejected with error code 101 and nothing is stored.
    """
    store.record_health_metric(
        caller,
        payload.metric_type,
        payload.value,
        payload.timestamp,
        payload.notes,
    )
    return RecordMetricResponse(ok=True)


@router.get("/{owner:path}/{metric_type}", response_model=LatestMeasurementResponse)
def get_latest_measurement(
    owner: str,
    metric_type: int = Path(..., ge=0, description="Metric type code"),
    store: BaseMetricStore = Depends(get_metric_store),
) -> LatestMeasurementResponse:
    """Return the latest ``{value, notes}`` for an owner, or ``null`` when none exists.

    ``owner`` may contain slashes; the last path segment is the metric type.
    """
    measurement = store.get_latest_measurement(owner, metric_type)
    return LatestMeasurementResponse(measurement=measurement)
