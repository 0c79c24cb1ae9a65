"""Telemetry provider system for rosterkit."""

from rosterkit.telemetry.base import (
    ROSTER_SIZE_METRIC,
    Attr,
    Span,
    SpanKind,
    TelemetryProvider,
)
from rosterkit.telemetry.config import TelemetryConfig
from rosterkit.telemetry.mock import MockTelemetryProvider
from rosterkit.telemetry.noop import NoopTelemetryProvider

__all__ = [
    "ROSTER_SIZE_METRIC",
    "Attr",
    "MockTelemetryProvider",
    "NoopTelemetryProvider",
    "Span",
    "SpanKind",
    "TelemetryConfig",
    "TelemetryProvider",
]
