"""
Metric log appender.

The metric log is append-only: a header line written once, when the file is
absent or empty, then one line per record. There is no locking; at most one
probe is expected to write the file at a time.
"""

import logging
from pathlib import Path
from typing import Union

from utils.exceptions import MetricLogError
from utils.schemas import CSV_HEADER, MetricRecord

logger = logging.getLogger(__name__)


def _needs_header(path: Path) -> bool:
    try:
        return path.stat().st_size == 0
    except FileNotFoundError:
        return True


def append(record: MetricRecord, log_path: Union[str, Path]) -> None:
    """
    Append one record to the metric log, writing the header first if needed.

    Args:
        record: Record to append
        log_path: CSV file path

    Raises:
        MetricLogError: If the header or the row cannot be written
    """
    path = Path(log_path)

    try:
        if _needs_header(path):
            logger.info("Creating new CSV file and writing header: %s", path)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "a", encoding="utf-8", newline="") as f:
                f.write(CSV_HEADER + "\n")
    except OSError as e:
        raise MetricLogError(
            f"Could not write header to {path}. Please check file permissions.",
            str(path),
            e,
        ) from e

    try:
        with open(path, "a", encoding="utf-8", newline="") as f:
            f.write(record.to_csv_line() + "\n")
    except OSError as e:
        raise MetricLogError(
            f"Could not append data to {path}. Please check file permissions or disk space.",
            str(path),
            e,
        ) from e

    logger.info("Success: Data appended to %s", path)
