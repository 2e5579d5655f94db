import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import orjson
import pytest
import requests

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from apps.status_probe.probe import StatusProbe  # noqa: E402

STATUS_URL = "https://status.example.test/save/status/system"
FIXED_NOW = datetime(2025, 1, 15, 3, 15, 2, tzinfo=timezone.utc)


def sample_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "status": "ok",
        "recent_captures": 5,
        "queues": {
            "spn2-captures": 1,
            "spn2-captures-misc": 2,
            "spn2-outlinks": 3,
            "spn2-outlinks-misc": 4,
            "spn2-api": 5,
            "spn2-api-misc": 6,
            "spn2-api-outlinks": 7,
            "spn2-api-outlinks-misc": 8,
            "spn2-high-fidelity": 9,
            "spn2-vip": 10,
            "spn2-vip-outlinks": 11,
            "spn2-screenshots": 12,
        },
    }
    payload.update(overrides)
    return payload


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code


class FakeSession:
    """Stands in for requests.Session; replays one body or raises one error."""

    def __init__(
        self,
        content: bytes = b"",
        status_code: int = 200,
        error: Optional[Exception] = None,
    ) -> None:
        self.content = content
        self.status_code = status_code
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append({"url": url, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return FakeResponse(self.content, self.status_code)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def ok_body() -> bytes:
    return orjson.dumps(sample_payload())


@pytest.fixture
def csv_path(tmp_path: Path) -> Path:
    return tmp_path / "db.csv"


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    return tmp_path / "data" / "log"


@pytest.fixture
def make_probe(csv_path: Path, log_dir: Path):
    def _make(
        content: bytes = b"",
        status_code: int = 200,
        error: Optional[Exception] = None,
        now: datetime = FIXED_NOW,
    ) -> StatusProbe:
        session = FakeSession(content=content, status_code=status_code, error=error)
        return StatusProbe(
            url=STATUS_URL,
            output_csv=csv_path,
            log_dir=log_dir,
            session=session,  # type: ignore[arg-type]
            timeout=5,
            clock=lambda: now,
        )

    return _make


@pytest.fixture
def connection_error() -> requests.exceptions.ConnectionError:
    return requests.exceptions.ConnectionError("Name or service not known")
