"""Authenticated, classified and logged outbound HTTP calls."""

from outcall.auth import AuthStrategy, BearerToken, StaticHeaders, no_auth
from outcall.config import ClientSettings, require_setting, setting_or_default, to_url
from outcall.diagnostics import FaultRecord, capture_fault, describe_fault, render_fault
from outcall.errors import (
    ConfigurationError,
    OutcallError,
    ProtocolError,
    RequestCancelledError,
)
from outcall.executor import CallExecutor
from outcall.logger import CallLogger, configure_from_settings, configure_logging
from outcall.outcome import Error, Faulted, NoContent, Outcome, OutcomeKind, Success

__all__ = [
    "AuthStrategy",
    "BearerToken",
    "CallExecutor",
    "CallLogger",
    "ClientSettings",
    "ConfigurationError",
    "Error",
    "FaultRecord",
    "Faulted",
    "NoContent",
    "OutcallError",
    "Outcome",
    "OutcomeKind",
    "ProtocolError",
    "RequestCancelledError",
    "StaticHeaders",
    "Success",
    "capture_fault",
    "configure_from_settings",
    "configure_logging",
    "describe_fault",
    "no_auth",
    "render_fault",
    "require_setting",
    "setting_or_default",
    "to_url",
]
