"""Telemetry provider that discards everything."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rosterkit.telemetry.base import SpanKind, TelemetryProvider

if TYPE_CHECKING:
    from rosterkit.models.delta import RosterDelta


class NoopTelemetryProvider(TelemetryProvider):
    """Default provider of ``RosterEngine``, and the stand-in for span kinds
    left out of ``TelemetryConfig.enabled_spans``."""

    @property
    def name(self) -> str:
        return "noop"

    def start_span(
        self,
        kind: SpanKind,
        name: str,
        *,
        attributes: dict[str, Any] | None = None,
        session_id: str | None = None,
    ) -> str:
        return ""

    def end_span(
        self, span_id: str, *, status: str = "ok", error_message: str | None = None
    ) -> None:
        pass

    def set_attribute(self, span_id: str, key: str, value: Any) -> None:
        pass

    def record_delta(self, span_id: str, delta: RosterDelta) -> None:
        pass

    def record_metric(
        self, name: str, value: float, *, attributes: dict[str, Any] | None = None
    ) -> None:
        pass
