from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    PAGE_FETCH_FAILED = "PAGE_FETCH_FAILED"
    CLASS_NOT_FOUND = "CLASS_NOT_FOUND"
    BASE_URL_MISSING = "BASE_URL_MISSING"
    INVALID_INPUT = "INVALID_INPUT"


class DoxyContextError(Exception):
    """Raised for all expected failure conditions.

    Tool handlers let it propagate; server.py serialises it into the MCP
    error response so the agent receives a structured error with a suggestion.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }


class FetchError(DoxyContextError):
    """A page could not be retrieved: non-2xx response or transport failure.

    ``status_code`` is ``None`` when the request never produced a response
    (DNS failure, refused connection, malformed URL).
    """

    def __init__(
        self,
        url: str,
        *,
        status_code: int | None = None,
        reason: str = "",
    ) -> None:
        if status_code is None:
            message = f"Network error fetching {url}: {reason}"
            code = ErrorCode.PAGE_FETCH_FAILED
            suggestion = "Check the documentation site address and your network connection."
            recoverable = True
        elif status_code == 404:
            message = f"{_status_line(status_code, reason)} fetching {url}"
            code = ErrorCode.PAGE_NOT_FOUND
            suggestion = "The requested documentation page does not exist at this URL."
            recoverable = False
        else:
            message = f"{_status_line(status_code, reason)} fetching {url}"
            code = ErrorCode.PAGE_FETCH_FAILED
            suggestion = "The documentation site may be temporarily unavailable."
            recoverable = True

        super().__init__(
            code=code,
            message=message,
            suggestion=suggestion,
            recoverable=recoverable,
        )
        self.url = url
        self.status_code = status_code
        self.reason = reason


def _status_line(status_code: int, reason: str) -> str:
    return f"HTTP {status_code} {reason}" if reason else f"HTTP {status_code}"
