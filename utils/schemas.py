"""
Pydantic Schemas - Data Validation Models

Defines the schemas flowing through the probe:
- StatusResponse: parsed body of the SPN2 status endpoint
- MetricRecord: one timestamped CSV row of the metric log

Usage:
    from utils.schemas import StatusResponse, MetricRecord

    response = StatusResponse.model_validate(payload)
    record = MetricRecord.from_response(timestamp, response)
"""

import csv
import io
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

# Booleans and numeric strings are rejected rather than coerced
Metric = Union[StrictInt, StrictFloat]

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class QueueMetrics(BaseModel):
    """Known SPN2 queue lengths, keyed by their API names.

    Unknown queues reported by the API are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    spn2_captures: Metric = Field(..., alias="spn2-captures")
    spn2_captures_misc: Metric = Field(..., alias="spn2-captures-misc")
    spn2_outlinks: Metric = Field(..., alias="spn2-outlinks")
    spn2_outlinks_misc: Metric = Field(..., alias="spn2-outlinks-misc")
    spn2_api: Metric = Field(..., alias="spn2-api")
    spn2_api_misc: Metric = Field(..., alias="spn2-api-misc")
    spn2_api_outlinks: Metric = Field(..., alias="spn2-api-outlinks")
    spn2_api_outlinks_misc: Metric = Field(..., alias="spn2-api-outlinks-misc")
    spn2_high_fidelity: Metric = Field(..., alias="spn2-high-fidelity")
    spn2_vip: Metric = Field(..., alias="spn2-vip")
    spn2_vip_outlinks: Metric = Field(..., alias="spn2-vip-outlinks")
    spn2_screenshots: Metric = Field(..., alias="spn2-screenshots")


class StatusResponse(BaseModel):
    """Status endpoint payload.

    {
        "status": "ok",
        "recent_captures": 5,
        "queues": {"spn2-captures": 1, "spn2-captures-misc": 2, ...}
    }
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    status: str
    recent_captures: Metric
    queues: QueueMetrics


class MetricRecord(BaseModel):
    """One row of the metric log.

    Field order is the column order of the CSV file.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(..., min_length=1)
    recent_captures: Metric
    queue_spn2_captures: Metric
    queue_spn2_captures_misc: Metric
    queue_spn2_outlinks: Metric
    queue_spn2_outlinks_misc: Metric
    queue_spn2_api: Metric
    queue_spn2_api_misc: Metric
    queue_spn2_api_outlinks: Metric
    queue_spn2_api_outlinks_misc: Metric
    queue_spn2_high_fidelity: Metric
    queue_spn2_vip: Metric
    queue_spn2_vip_outlinks: Metric
    queue_spn2_screenshots: Metric

    @classmethod
    def from_response(cls, timestamp: str, response: StatusResponse) -> "MetricRecord":
        """Project a validated response into a row stamped with ``timestamp``."""
        queues = response.queues
        return cls(
            timestamp=timestamp,
            recent_captures=response.recent_captures,
            queue_spn2_captures=queues.spn2_captures,
            queue_spn2_captures_misc=queues.spn2_captures_misc,
            queue_spn2_outlinks=queues.spn2_outlinks,
            queue_spn2_outlinks_misc=queues.spn2_outlinks_misc,
            queue_spn2_api=queues.spn2_api,
            queue_spn2_api_misc=queues.spn2_api_misc,
            queue_spn2_api_outlinks=queues.spn2_api_outlinks,
            queue_spn2_api_outlinks_misc=queues.spn2_api_outlinks_misc,
            queue_spn2_high_fidelity=queues.spn2_high_fidelity,
            queue_spn2_vip=queues.spn2_vip,
            queue_spn2_vip_outlinks=queues.spn2_vip_outlinks,
            queue_spn2_screenshots=queues.spn2_screenshots,
        )

    def as_row(self) -> list[str]:
        """Field values as strings, in column order."""
        row = []
        for name in CSV_COLUMNS:
            value = getattr(self, name)
            row.append(value if isinstance(value, str) else _format_number(value))
        return row

    def to_csv_line(self) -> str:
        """Serialize as one CSV line without the trailing line break."""
        return format_csv_line(self.as_row())


def _format_number(value: Union[int, float]) -> str:
    if isinstance(value, int):
        return str(value)
    return repr(value)


def format_csv_line(fields: list[str]) -> str:
    """Join fields with csv's minimal quoting, no line terminator."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="")
    writer.writerow(fields)
    return buffer.getvalue()


CSV_COLUMNS: tuple[str, ...] = tuple(MetricRecord.model_fields)
CSV_HEADER = format_csv_line(list(CSV_COLUMNS))
