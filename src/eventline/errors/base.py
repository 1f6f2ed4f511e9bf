"""错误基类：统一的结构化请求错误。

Base error classes for eventline.

Provides:
- EventlineError: Base class for all library errors
- RequestError: Structured failure of an API call, tagged by code
- ContextError: Failure to load the task context file
"""

from __future__ import annotations

from typing import Any

from eventline.errors.codes import TRANSPORT_ERROR_CODES, ErrorCode


class EventlineError(Exception):
    """Base class for all eventline errors.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str | None = None) -> None:
        self.message = message
        super().__init__(message or "")


class RequestError(EventlineError):
    """Failure of a single API call.

    Every failure the transport can report is a RequestError; callers
    dispatch on ``code`` rather than on exception subclasses.

    Attributes:
        status: HTTP status code, or None when no response was received
        code: Library error code (see ErrorCode) or the server's own code, as a string
        data: Structured payload attached to the error
        message: Optional human-readable message
    """

    def __init__(
        self,
        status: int | None,
        code: str | ErrorCode,
        data: Any = None,
        message: str | None = None,
    ) -> None:
        self.status = status
        self.code = code.value if isinstance(code, ErrorCode) else str(code)
        self.data = {} if data is None else data
        super().__init__(message)

    @property
    def is_transport_error(self) -> bool:
        """Whether the call failed before any HTTP status was known."""
        return isinstance(self.code, str) and self.code in TRANSPORT_ERROR_CODES

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display or JSON output."""
        result: dict[str, Any] = {"code": self.code}
        if self.status is not None:
            result["status"] = self.status
        if self.message:
            result["message"] = self.message
        if self.data:
            result["data"] = self.data
        return result

    def __str__(self) -> str:
        parts = []
        if self.status is not None:
            parts.append(f"HTTP {self.status}")
        parts.append(self.code)
        text = " ".join(parts)
        if self.message:
            text = f"{text}: {self.message}"
        return text

    def __repr__(self) -> str:
        return (
            f"RequestError(status={self.status!r}, code={self.code!r}, "
            f"data={self.data!r}, message={self.message!r})"
        )


class ContextError(EventlineError):
    """Error while reading or decoding the task context file.

    Attributes:
        path: Location of the context file
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
