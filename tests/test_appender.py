import os

import pytest

from apps.status_probe.appender import append
from apps.status_probe.extractor import extract
from utils.exceptions import MetricLogError
from utils.schemas import CSV_HEADER


@pytest.fixture
def record(ok_body):
    return extract(ok_body, "2025-01-15T03:15:02Z")


def test_append_creates_file_with_header(record, csv_path):
    append(record, csv_path)

    assert csv_path.read_text(encoding="utf-8").splitlines() == [
        CSV_HEADER,
        "2025-01-15T03:15:02Z,5,1,2,3,4,5,6,7,8,9,10,11,12",
    ]


def test_append_writes_header_once(record, csv_path):
    for _ in range(3):
        append(record, csv_path)

    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == CSV_HEADER
    assert lines.count(CSV_HEADER) == 1
    assert len(lines) == 4


def test_append_writes_header_into_empty_file(record, csv_path):
    csv_path.touch()

    append(record, csv_path)

    assert csv_path.read_text(encoding="utf-8").splitlines()[0] == CSV_HEADER


def test_append_preserves_existing_rows(record, csv_path):
    csv_path.write_text(CSV_HEADER + "\nold,row\n", encoding="utf-8")

    append(record, csv_path)

    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert lines[:2] == [CSV_HEADER, "old,row"]
    assert len(lines) == 3


def test_append_lines_end_with_newline(record, csv_path):
    append(record, csv_path)

    assert csv_path.read_bytes().endswith(b"12\n")
    assert b"\r" not in csv_path.read_bytes()


def test_append_creates_parent_dirs(record, tmp_path):
    target = tmp_path / "nested" / "db.csv"

    append(record, target)

    assert target.exists()


def test_append_header_failure(record, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    target = blocker / "db.csv"

    with pytest.raises(MetricLogError) as exc_info:
        append(record, target)

    assert "Could not write header" in exc_info.value.message


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs non-root POSIX permissions")
def test_append_row_failure(record, csv_path):
    csv_path.write_text(CSV_HEADER + "\n", encoding="utf-8")
    csv_path.chmod(0o444)

    try:
        with pytest.raises(MetricLogError) as exc_info:
            append(record, csv_path)
    finally:
        csv_path.chmod(0o644)

    assert "Could not append data" in exc_info.value.message
    assert csv_path.read_text(encoding="utf-8") == CSV_HEADER + "\n"
