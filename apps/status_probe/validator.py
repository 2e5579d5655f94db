"""
Status payload validation.

``validate`` only extracts the status; judging it is ``ensure_ok``'s job.
"""

import logging
from typing import Any

import orjson

from utils.exceptions import ParseError, UnhealthyStatusError

logger = logging.getLogger(__name__)

HEALTHY_STATUS = "ok"


def decode_payload(body: bytes) -> dict[str, Any]:
    """
    Decode the body into a JSON object.

    Raises:
        ParseError: If the body is not JSON or not a JSON object
    """
    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError as e:
        raise ParseError(f"invalid JSON ({e})", body) from e

    if not isinstance(payload, dict):
        raise ParseError(f"expected a JSON object, got {type(payload).__name__}", body)

    return payload


def validate(body: bytes) -> str:
    """
    Extract the top-level 'status' field.

    Non-string values are rendered as their JSON text.

    Args:
        body: Raw response body

    Returns:
        Status value as a string

    Raises:
        ParseError: If the body is malformed or 'status' is absent, null or false
    """
    payload = decode_payload(body)
    status = payload.get("status")

    if status is None or status is False:
        raise ParseError("'status' field is missing or null", body)

    if not isinstance(status, str):
        status = orjson.dumps(status).decode("utf-8")

    return status


def ensure_ok(status: str, body: bytes) -> None:
    """
    Raises:
        UnhealthyStatusError: If status is not exactly 'ok'
    """
    if status != HEALTHY_STATUS:
        raise UnhealthyStatusError(status, body)

    logger.debug("API status is %r", status)
