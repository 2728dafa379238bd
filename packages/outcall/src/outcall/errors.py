"""Error hierarchy for outbound calls."""

from __future__ import annotations


class OutcallError(Exception):
    """Base error for all outcall errors."""

    def __init__(self, message: str, *, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ProtocolError(OutcallError):
    """The remote service answered with a non-success status code."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause=cause)
        self.status_code = status_code


class RequestCancelledError(OutcallError):
    """The caller's cancellation signal fired while the request was in flight."""

    def __init__(self, url: str, *, cause: BaseException | None = None):
        super().__init__(f"Request to {url} was cancelled", cause=cause)
        self.url = url


class ConfigurationError(OutcallError):
    """A required setting is missing or malformed."""
