"""
Metric extraction.

Turns a validated status body into a MetricRecord. Any missing, null or
non-numeric metric fails the whole row; columns are never emptied or zeroed.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import orjson
from pydantic import ValidationError

from utils.exceptions import ExtractionError
from utils.schemas import TIMESTAMP_FORMAT, MetricRecord, StatusResponse

logger = logging.getLogger(__name__)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """Format ``now`` (default: current time) as YYYY-MM-DDTHH:MM:SSZ in UTC."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{location}: {first['msg']} ({error.error_count()} error(s))"


def extract(body: bytes, timestamp: str) -> MetricRecord:
    """
    Project the status body into a metric record.

    Args:
        body: Raw response body, already validated
        timestamp: Capture timestamp from utc_timestamp()

    Returns:
        Immutable record in CSV column order

    Raises:
        ExtractionError: If a required field is absent or malformed, or the
            row serializes to nothing
    """
    try:
        response = StatusResponse.model_validate(orjson.loads(body))
        record = MetricRecord.from_response(timestamp, response)
    except orjson.JSONDecodeError as e:
        raise ExtractionError(f"invalid JSON ({e})", body) from e
    except ValidationError as e:
        raise ExtractionError(_describe(e), body) from e

    if not record.to_csv_line():
        raise ExtractionError("row serialized to an empty line", body)

    logger.debug("Extracted metrics", extra={"timestamp": timestamp})
    return record
