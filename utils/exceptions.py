"""
Exception hierarchy for the status probe.

Every pipeline failure carries the raw response body received so far
(possibly empty) so that diagnostics can persist it verbatim.
"""

from typing import Any, Dict, Optional


class ProbeError(Exception):
    """Base exception for all probe errors."""

    def __init__(
        self,
        message: str,
        raw_response: bytes = b"",
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            raw_response: Raw response body received before the failure
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.raw_response = raw_response
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "response_bytes": len(self.raw_response),
            "context": self.context,
        }


class TransportError(ProbeError):
    """The HTTP request could not complete."""

    def __init__(self, url: str, original_error: Exception) -> None:
        message = (
            f"HTTP request failed ({type(original_error).__name__}). "
            f"Check network connection or URL: {url}"
        )
        context = {"url": url, "original_error": str(original_error)}
        super().__init__(message, context=context)


class EmptyResponseError(ProbeError):
    """The request succeeded but returned no body."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(
            "API returned an empty response.",
            context={"url": url, "status_code": status_code},
        )


class ParseError(ProbeError):
    """Body is not a JSON object with a non-null 'status' field."""

    def __init__(self, reason: str, raw_response: bytes) -> None:
        super().__init__(
            f"JSON parsing failed or 'status' field missing/null: {reason}",
            raw_response=raw_response,
            context={"reason": reason},
        )


class UnhealthyStatusError(ProbeError):
    """The API reported a status other than 'ok'."""

    def __init__(self, status: str, raw_response: bytes) -> None:
        super().__init__(
            f"API reported status is not 'ok'. Received status: {status}",
            raw_response=raw_response,
            context={"status": status},
        )
        self.status = status


class ExtractionError(ProbeError):
    """Required metric fields are missing or malformed."""

    def __init__(self, reason: str, raw_response: bytes) -> None:
        super().__init__(
            "Data extraction failed. JSON structure may have changed "
            f"or key fields are missing: {reason}",
            raw_response=raw_response,
            context={"reason": reason},
        )


class MetricLogError(ProbeError):
    """Writing the header or a row to the metric log failed."""

    def __init__(self, message: str, path: str, original_error: OSError) -> None:
        super().__init__(
            message,
            context={"path": path, "original_error": str(original_error)},
        )


class DiagnosticsError(ProbeError):
    """The diagnostic bundle directory could not be created."""

    def __init__(self, path: str, original_error: OSError) -> None:
        super().__init__(
            f"Could not create log directory {path}. Please check permissions.",
            context={"path": path, "original_error": str(original_error)},
        )
