import logging

import pytest
import requests

from apps.status_probe.fetcher import create_session, fetch
from tests.conftest import STATUS_URL, FakeSession
from utils.exceptions import EmptyResponseError, TransportError


def test_fetch_returns_raw_body():
    session = FakeSession(content=b'{"status": "ok"}')

    body = fetch(STATUS_URL, session=session, timeout=7)

    assert body == b'{"status": "ok"}'
    assert session.calls == [{"url": STATUS_URL, "timeout": 7}]


def test_fetch_single_attempt_on_transport_failure(connection_error):
    session = FakeSession(error=connection_error)

    with pytest.raises(TransportError) as exc_info:
        fetch(STATUS_URL, session=session, timeout=7)

    assert len(session.calls) == 1
    assert "ConnectionError" in exc_info.value.message
    assert STATUS_URL in exc_info.value.message
    assert exc_info.value.raw_response == b""


def test_fetch_timeout_is_transport_failure():
    session = FakeSession(error=requests.exceptions.Timeout("read timed out"))

    with pytest.raises(TransportError) as exc_info:
        fetch(STATUS_URL, session=session, timeout=1)

    assert "Timeout" in exc_info.value.message


def test_fetch_empty_body_raises():
    session = FakeSession(content=b"")

    with pytest.raises(EmptyResponseError) as exc_info:
        fetch(STATUS_URL, session=session)

    assert "empty response" in exc_info.value.message
    assert exc_info.value.raw_response == b""


def test_fetch_non_2xx_passes_body_through(caplog):
    caplog.set_level(logging.WARNING, logger="apps.status_probe.fetcher")
    session = FakeSession(content=b"<html>Bad Gateway</html>", status_code=502)

    body = fetch(STATUS_URL, session=session)

    assert body == b"<html>Bad Gateway</html>"
    assert "HTTP 502" in caplog.text


def test_create_session_sets_headers():
    session = create_session(user_agent="probe-test/1.0")
    try:
        assert session.headers["User-Agent"] == "probe-test/1.0"
        assert session.headers["Accept"] == "application/json"
    finally:
        session.close()
