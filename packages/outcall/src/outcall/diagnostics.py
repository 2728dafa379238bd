"""Structured fault capture and rendering for fatal call logs.

Capture and rendering are separate steps: :func:`capture_fault` turns an
exception into a :class:`FaultRecord`, :func:`render_fault` turns the record
into the text carried by the fatal log event.
"""

from __future__ import annotations

import inspect
import traceback
from dataclasses import dataclass
from types import FrameType

UNKNOWN_FILENAME = "[Unknown filename]"
UNKNOWN_LINE = "[Unknown line]"
UNKNOWN_METHOD = "[Unknown method]"


@dataclass(frozen=True)
class SourceLocation:
    filename: str
    lineno: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.lineno}"


@dataclass(frozen=True)
class FrameRecord:
    """One traceback frame: where it ran and what it was called with."""

    location: SourceLocation
    signature: str


@dataclass(frozen=True)
class CauseRecord:
    type_name: str
    message: str


@dataclass(frozen=True)
class FaultRecord:
    """Everything the fatal log needs to know about a fault.

    ``causes`` starts with the fault itself. ``frames`` is innermost first,
    so ``frames[0]`` is where the fault was raised.
    """

    type_name: str
    message: str
    location: SourceLocation | None
    signature: str | None
    causes: tuple[CauseRecord, ...]
    frames: tuple[FrameRecord, ...]


def capture_fault(exc: BaseException) -> FaultRecord:
    """Build a :class:`FaultRecord` from a raised exception."""
    frames = tuple(
        FrameRecord(location=SourceLocation(frame.f_code.co_filename, lineno), signature=_signature(frame))
        for frame, lineno in reversed(list(traceback.walk_tb(exc.__traceback__)))
        if _has_source(frame)
    )
    first = frames[0] if frames else None
    return FaultRecord(
        type_name=type(exc).__name__,
        message=safe_str(exc),
        location=first.location if first else None,
        signature=first.signature if first else None,
        causes=tuple(_cause_chain(exc)),
        frames=frames,
    )


def render_fault(record: FaultRecord) -> str:
    filename = record.location.filename if record.location else UNKNOWN_FILENAME
    line = str(record.location.lineno) if record.location else UNKNOWN_LINE
    signature = record.signature or UNKNOWN_METHOD
    levels = "\n".join(
        f"Inner Exception Level {level}: {cause.message}"
        for level, cause in enumerate(record.causes, start=1)
    )
    calls = "\n".join(f"{frame.location} | {frame.signature}" for frame in record.frames)
    return (
        f"{signature} in {filename} threw an {record.type_name} on line {line}.\n"
        f"Message:\n{record.message}\n"
        f"InnerException:\n{levels}\n"
        f"StackCall:\n{calls}"
    )


def describe_fault(exc: BaseException) -> str:
    return render_fault(capture_fault(exc))


def safe_str(exc: BaseException) -> str:
    """``str(exc)``, or a placeholder when the exception cannot be printed."""
    try:
        return str(exc)
    except Exception:
        return f"<unprintable {type(exc).__name__}>"


def _has_source(frame: FrameType) -> bool:
    # Pseudo-files such as "<string>" or "<frozen runpy>" have no source.
    filename = frame.f_code.co_filename
    return bool(filename) and not filename.startswith("<")


def _signature(frame: FrameType) -> str:
    """Rebuild ``name(param: Type, ...)`` from a frame's code and locals."""
    code = frame.f_code
    count = code.co_argcount + code.co_kwonlyargcount
    names = list(code.co_varnames[:count])
    if code.co_flags & inspect.CO_VARARGS:
        names.append("*" + code.co_varnames[count])
        count += 1
    if code.co_flags & inspect.CO_VARKEYWORDS:
        names.append("**" + code.co_varnames[count])

    params = []
    for name in names:
        bare = name.lstrip("*")
        if bare in frame.f_locals:
            params.append(f"{name}: {type(frame.f_locals[bare]).__name__}")
        else:
            params.append(name)
    qualname = getattr(code, "co_qualname", code.co_name)
    return f"{qualname}({', '.join(params)})"


def _cause_chain(exc: BaseException) -> list[CauseRecord]:
    chain: list[CauseRecord] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        chain.append(CauseRecord(type_name=type(current).__name__, message=safe_str(current)))
        current = _next_cause(current)
    return chain


def _next_cause(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    explicit = getattr(exc, "cause", None)
    if isinstance(explicit, BaseException):
        return explicit
    if exc.__suppress_context__:
        return None
    return exc.__context__
