"""
Status endpoint fetcher.

One synchronous GET per invocation, no retries.
"""

import logging
from typing import Optional

import requests

from utils.config import settings
from utils.exceptions import EmptyResponseError, TransportError

logger = logging.getLogger(__name__)


def create_session(user_agent: Optional[str] = None) -> requests.Session:
    """Build an HTTP session with the probe's default headers."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": user_agent or settings.HTTP_USER_AGENT,
        "Accept": "application/json",
    })
    return session


def fetch(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> bytes:
    """
    Fetch the raw status body.

    Non-2xx responses are returned as-is so that an error page reaches
    validation and is captured in the diagnostic bundle.

    Args:
        url: Status endpoint URL
        session: HTTP session, a fresh one is created if omitted
        timeout: Request timeout in seconds, defaults to settings.API_TIMEOUT

    Returns:
        Raw response body

    Raises:
        TransportError: If the request could not complete
        EmptyResponseError: If the response body is empty
    """
    timeout = timeout if timeout is not None else settings.API_TIMEOUT
    owns_session = session is None
    session = session or create_session()

    logger.info("Fetching data from API: %s", url)

    try:
        response = session.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise TransportError(url, e) from e
    finally:
        if owns_session:
            session.close()

    if not 200 <= response.status_code < 300:
        logger.warning(
            "API responded with HTTP %d",
            response.status_code,
            extra={"url": url, "status_code": response.status_code},
        )

    body = response.content
    if not body:
        raise EmptyResponseError(url, response.status_code)

    logger.debug("Received %d bytes", len(body), extra={"url": url})
    return body
