"""Telemetry configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rosterkit.telemetry.base import SpanKind, TelemetryProvider


@dataclass
class TelemetryConfig:
    """Configuration for telemetry collection.

    Attributes:
        provider: The telemetry provider to use. Defaults to
            ``NoopTelemetryProvider`` if not set.
        enabled_spans: If set, only these span kinds are recorded.
            ``None`` means all span kinds are enabled.
        metadata: Extra attributes attached to every recorded span.
    """

    provider: TelemetryProvider | None = None
    enabled_spans: set[SpanKind] | None = None
    metadata: dict[str, str] = field(default_factory=dict)
