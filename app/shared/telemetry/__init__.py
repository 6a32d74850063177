"""Shared telemetry: logging setup and tracing helpers."""

from app.shared.telemetry.logging import RequestIdFilter, get_logger, setup_logging
from app.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "RequestIdFilter",
    "traced",
    "add_span_attributes",
    "add_span_event",
]
