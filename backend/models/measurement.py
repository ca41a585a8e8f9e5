"""Pydantic schemas representing health measurements."""

from pydantic import BaseModel, Field

# Largest value a DuckDB UHUGEINT column can hold.
UINT_MAX = 2**128 - 1


class Measurement(BaseModel):
    """The latest reading stored for one owner and metric type."""
    owner: str
    metric_type: int = Field(ge=0)
    value: int = Field(ge=0, le=UINT_MAX)
    timestamp: int = Field(ge=0, le=UINT_MAX)
    notes: str | None = None

    def to_latest(self) -> "LatestMeasurement":
        return LatestMeasurement(value=self.value, notes=self.notes)


class LatestMeasurement(BaseModel):
    """Read projection of a measurement: owner and timestamp are not echoed."""
    value: int
    notes: str | None = None


class RecordMetricRequest(BaseModel):
    metric_type: int = Field(ge=0, description="Metric type code, see /metrics/types")
    value: int = Field(ge=0, le=UINT_MAX, description="Magnitude of the reading")
    timestamp: int = Field(ge=0, le=UINT_MAX, description="Caller supplied timestamp")
    notes: str | None = Field(None, description="Optional free-text annotation")


class RecordMetricResponse(BaseModel):
    ok: bool = True


class LatestMeasurementResponse(BaseModel):
    measurement: LatestMeasurement | None = None


class MetricTypeInfo(BaseModel):
    code: int
    name: str
