"""
Diagnostic bundles for failed probes.

Each failure gets its own directory named by the UTC time of the failure:

    data/log/2025-01-15_03-15-02/
        error.log           2025-01-15T03:15:02Z: <message>
        raw_response.json   verbatim response body (empty if none was received)

Bundles are never cleaned up here; retention is left to the operator.
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import NoReturn, Optional, Union

from utils.config import settings
from utils.exceptions import DiagnosticsError
from utils.schemas import TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)

BUNDLE_DIR_FORMAT = "%Y-%m-%d_%H-%M-%S"
ERROR_LOG_NAME = "error.log"
RAW_RESPONSE_NAME = "raw_response.json"


def write_bundle(
    message: str,
    raw_response: bytes = b"",
    base_dir: Union[str, Path, None] = None,
    now: Optional[datetime] = None,
) -> Path:
    """
    Write a diagnostic bundle and return its directory.

    A directory left by an earlier failure in the same second is reused.

    Args:
        message: Error message for error.log
        raw_response: Raw body to persist verbatim
        base_dir: Bundle root, defaults to settings.BASE_LOG_DIR
        now: Failure time, defaults to the current UTC time

    Raises:
        DiagnosticsError: If the bundle directory cannot be created
        OSError: If a bundle file cannot be written
    """
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    base = Path(base_dir if base_dir is not None else settings.BASE_LOG_DIR)
    bundle_dir = base / now.strftime(BUNDLE_DIR_FORMAT)

    logger.info("Creating log directory: %s", bundle_dir)

    try:
        bundle_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DiagnosticsError(str(bundle_dir), e) from e

    with open(bundle_dir / ERROR_LOG_NAME, "w", encoding="utf-8") as f:
        f.write(f"{now.strftime(TIMESTAMP_FORMAT)}: {message}\n")

    (bundle_dir / RAW_RESPONSE_NAME).write_bytes(raw_response)

    return bundle_dir


def report(
    message: str,
    raw_response: bytes = b"",
    base_dir: Union[str, Path, None] = None,
    now: Optional[datetime] = None,
) -> NoReturn:
    """
    Log the failure, write its diagnostic bundle and exit with status 1.

    Never returns.
    """
    logger.error("Error: %s", message)

    try:
        bundle_dir = write_bundle(message, raw_response, base_dir=base_dir, now=now)
    except DiagnosticsError as e:
        logger.critical("Fatal Error: %s", e.message, extra=e.context)
        sys.exit(1)
    except OSError as e:
        logger.critical(
            "Fatal Error: Could not write diagnostic bundle: %s", e,
            extra={"error": str(e)},
        )
        sys.exit(1)

    logger.error(
        "Diagnostic bundle written to %s",
        bundle_dir,
        extra={"bundle_dir": str(bundle_dir), "response_bytes": len(raw_response)},
    )
    sys.exit(1)
