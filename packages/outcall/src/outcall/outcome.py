"""Outcome model: the closed set of results every classified call returns.

Each variant is a constrained construction of :class:`Outcome`, so callers
can branch on ``is_successful`` or match the variant directly::

    match outcome:
        case Success(value=response):
            ...
        case NoContent():
            ...
        case Error(status_code=code):
            ...
        case Faulted(exception=exc):
            ...
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Generic, TypeVar

from outcall.diagnostics import safe_str
from outcall.errors import ProtocolError, RequestCancelledError

T = TypeVar("T")

DEFAULT_MESSAGES: tuple[str, ...] = ("Ok",)
MESSAGE_SEPARATOR = "\r\n"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    NO_CONTENT = "no_content"
    ERROR = "error"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Immutable result of one operation.

    ``exception`` is the only field that may be set after construction, and
    only once (see :meth:`attach_exception`). It does not take part in
    equality.
    """

    status_code: int
    messages: tuple[str, ...]
    value: T | None = None
    is_successful: bool = False
    exception: BaseException | None = field(default=None, compare=False)

    @property
    def kind(self) -> OutcomeKind:
        if self.is_successful:
            return OutcomeKind.SUCCESS if self.value is not None else OutcomeKind.NO_CONTENT
        if isinstance(self.exception, ProtocolError):
            return OutcomeKind.ERROR
        return OutcomeKind.EXCEPTION

    @property
    def joined_messages(self) -> str:
        return MESSAGE_SEPARATOR.join(self.messages)

    def attach_exception(self, exception: BaseException) -> None:
        """Attach an exception to an outcome that does not carry one yet."""
        if self.exception is not None:
            raise ValueError("Outcome already carries an exception")
        object.__setattr__(self, "exception", exception)


class Success(Outcome[T]):
    """Protocol-level success with a usable payload."""

    kind = OutcomeKind.SUCCESS

    def __init__(
        self,
        value: T,
        messages: Sequence[str] | None = None,
        status_code: int = HTTPStatus.OK,
    ):
        super().__init__(
            status_code=int(status_code),
            messages=tuple(messages) if messages is not None else DEFAULT_MESSAGES,
            value=value,
            is_successful=True,
        )


class NoContent(Outcome[T]):
    """Protocol-level success that carries no payload by design."""

    kind = OutcomeKind.NO_CONTENT

    def __init__(self, messages: Sequence[str] | None = None):
        super().__init__(
            status_code=int(HTTPStatus.NO_CONTENT),
            messages=tuple(messages) if messages is not None else DEFAULT_MESSAGES,
            is_successful=True,
        )


class Error(Outcome[T]):
    """Protocol-level failure; the caller decides how to recover.

    The attached exception is a :class:`ProtocolError` synthesized from the
    joined messages.
    """

    kind = OutcomeKind.ERROR

    def __init__(self, messages: Sequence[str], status_code: int):
        super().__init__(
            status_code=int(status_code),
            messages=tuple(messages),
        )
        object.__setattr__(
            self,
            "exception",
            ProtocolError(self.joined_messages, status_code=self.status_code),
        )


class Faulted(Outcome[T]):
    """An unexpected runtime fault; always reported as status 500."""

    kind = OutcomeKind.EXCEPTION

    def __init__(self, exception: BaseException):
        message = safe_str(exception) or type(exception).__name__
        super().__init__(
            status_code=int(HTTPStatus.INTERNAL_SERVER_ERROR),
            messages=(message,),
            exception=exception,
        )

    @property
    def cancelled(self) -> bool:
        """True when the fault came from the caller's cancellation signal."""
        return isinstance(self.exception, RequestCancelledError)
