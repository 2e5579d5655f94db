"""
Status Probe - Single-Shot Pipeline Runner

Runs fetch -> validate -> extract -> append exactly once and exits.

Exit codes:
- 0: row appended
- 1: any failure (diagnostic bundle written for fetch/validation/extraction
     failures, fatal message only for metric log or bundle write failures)

Usage:
    python -m apps.status_probe

    # Override targets via environment
    STATUS_API_URL=http://localhost:8080/status OUTPUT_CSV=/tmp/db.csv spn2-probe
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Union

import requests

from apps.status_probe import diagnostics
from apps.status_probe.appender import append
from apps.status_probe.extractor import extract, utc_timestamp
from apps.status_probe.fetcher import create_session, fetch
from apps.status_probe.validator import ensure_ok, validate
from utils.config import settings
from utils.exceptions import MetricLogError, ProbeError
from utils.logging import setup_logging
from utils.schemas import MetricRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StatusProbe:
    """
    One probe run against the SPN2 status endpoint.

    Handles:
    - Pipeline sequencing with short-circuit on the first failure
    - Routing fetch/validation/extraction failures to diagnostics
    - Fatal exit on metric log write failures
    """

    def __init__(
        self,
        url: Optional[str] = None,
        output_csv: Union[str, Path, None] = None,
        log_dir: Union[str, Path, None] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize probe.

        Args:
            url: Status endpoint, defaults to settings.STATUS_API_URL
            output_csv: Metric log path, defaults to settings.OUTPUT_CSV
            log_dir: Diagnostic bundle root, defaults to settings.BASE_LOG_DIR
            session: HTTP session, defaults to a fresh session
            timeout: Request timeout, defaults to settings.API_TIMEOUT
            clock: Returns the current UTC time
        """
        self.url = url or settings.STATUS_API_URL
        self.output_csv = Path(output_csv or settings.OUTPUT_CSV)
        self.log_dir = Path(log_dir or settings.BASE_LOG_DIR)
        self.session = session
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT
        self.clock = clock

    def collect(self) -> MetricRecord:
        """
        Fetch, validate and extract one record.

        Raises:
            ProbeError: On the first failing stage
        """
        body = fetch(self.url, session=self.session, timeout=self.timeout)
        status = validate(body)
        ensure_ok(status, body)

        # Stamped at capture, after validation, not at request time
        timestamp = utc_timestamp(self.clock())
        return extract(body, timestamp)

    def run(self) -> int:
        """
        Execute the pipeline once.

        Returns:
            0 on success; failures exit the process with status 1
        """
        try:
            record = self.collect()
        except ProbeError as e:
            logger.debug("Probe failed", extra={"error": e.to_dict()})
            diagnostics.report(e.message, e.raw_response, base_dir=self.log_dir, now=self.clock())

        try:
            append(record, self.output_csv)
        except MetricLogError as e:
            logger.critical("Fatal Error: %s", e.message, extra=e.context)
            sys.exit(1)

        return 0


def main() -> int:
    """Main entry point for the probe."""
    setup_logging(level=settings.LOG_LEVEL, format_type=settings.LOG_FORMAT)

    probe = StatusProbe(session=create_session())

    try:
        return probe.run()
    except Exception as e:
        logger.error("Probe failed", extra={"error": str(e)}, exc_info=True)
        return 1
    finally:
        probe.session.close()


if __name__ == "__main__":
    sys.exit(main())
