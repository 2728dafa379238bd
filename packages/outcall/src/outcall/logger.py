"""Logger collaborator for the call executor, built on structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from outcall.config import ClientSettings
from outcall.diagnostics import describe_fault


class CallLogger:
    """Leveled structured logging plus the two HTTP-call events.

    Every method is fire-and-forget.
    """

    def __init__(self, logger: Any | None = None):
        self._logger = logger if logger is not None else structlog.get_logger("outcall")

    def information_http_request(self, component: str, operation: str, verb: str, url: str) -> None:
        self._logger.info(
            "http_request_started",
            component=component,
            operation=operation,
            verb=verb,
            url=url,
        )

    def fatal_http_exception(
        self,
        component: str,
        operation: str,
        verb: str,
        url: str,
        fault: BaseException,
    ) -> None:
        self._logger.critical(
            "http_request_crashed",
            component=component,
            operation=operation,
            verb=verb,
            url=url,
            exception_type=type(fault).__name__,
            diagnostics=describe_fault(fault),
            exc_info=fault,
        )

    def info(self, event: str, **kw: Any) -> None:
        self._logger.info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._logger.warning(event, **kw)


def configure_from_settings(settings: ClientSettings, *, json: bool = True) -> None:
    """Set up logging at the level named by ``OUTCALL_LOG_LEVEL``."""
    configure_logging(settings.log_level, json=json)


def configure_logging(level: str = "INFO", *, json: bool = True) -> None:
    """Route structlog through stdlib logging to stderr."""
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger().setLevel(level.upper())

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
