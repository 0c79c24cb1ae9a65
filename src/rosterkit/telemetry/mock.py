"""Telemetry provider that keeps roster spans and size samples for assertions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from rosterkit.telemetry.base import ROSTER_SIZE_METRIC, Span, SpanKind, TelemetryProvider

if TYPE_CHECKING:
    from rosterkit.models.delta import RosterDelta


class MockTelemetryProvider(TelemetryProvider):
    """Records completed spans with their deltas, plus every metric sample.

    Example::

        telemetry = MockTelemetryProvider()
        engine = RosterEngine(source, config=RosterConfig(
            telemetry=TelemetryConfig(provider=telemetry),
        ))
        # ... feed participant events ...
        assert telemetry.moves() == [("b", 2, 1)]
        assert telemetry.sizes() == [1, 2, 3]
    """

    def __init__(self) -> None:
        self._open: dict[str, Span] = {}
        self.spans: list[Span] = []
        self.metrics: list[dict[str, Any]] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def open_spans(self) -> list[Span]:
        """Spans started but not yet ended."""
        return list(self._open.values())

    def get_spans(
        self, kind: SpanKind | None = None, *, participant_id: str | None = None
    ) -> list[Span]:
        """Completed spans, optionally filtered by kind and participant."""
        return [
            s
            for s in self.spans
            if (kind is None or s.kind == kind)
            and (participant_id is None or s.participant_id == participant_id)
        ]

    def deltas(self, participant_id: str | None = None) -> list[RosterDelta]:
        """Every delta reported so far, in emission order."""
        return [d for s in self.get_spans(participant_id=participant_id) for d in s.deltas]

    def moves(self) -> list[tuple[str | None, int, int]]:
        """``(participant_id, from_index, to_index)`` for each relocation."""
        return [
            (s.participant_id, d.index, d.new_index)
            for s in self.spans
            for d in s.deltas
            if d.new_index is not None
        ]

    def sizes(self) -> list[int]:
        """Recorded roster sizes, oldest first."""
        return [int(m["value"]) for m in self.metrics if m["name"] == ROSTER_SIZE_METRIC]

    def start_span(
        self,
        kind: SpanKind,
        name: str,
        *,
        attributes: dict[str, Any] | None = None,
        session_id: str | None = None,
    ) -> str:
        span = Span(
            kind=kind,
            name=name,
            attributes=dict(attributes) if attributes else {},
            session_id=session_id,
        )
        self._open[span.id] = span
        return span.id

    def end_span(
        self, span_id: str, *, status: str = "ok", error_message: str | None = None
    ) -> None:
        span = self._open.pop(span_id, None)
        if span is None:
            return
        span.end_time = datetime.now(UTC)
        span.status = status
        span.error_message = error_message
        self.spans.append(span)

    def set_attribute(self, span_id: str, key: str, value: Any) -> None:
        span = self._open.get(span_id)
        if span is not None:
            span.attributes[key] = value

    def record_delta(self, span_id: str, delta: RosterDelta) -> None:
        span = self._open.get(span_id)
        if span is not None:
            span.deltas.append(delta)
        super().record_delta(span_id, delta)

    def record_metric(
        self, name: str, value: float, *, attributes: dict[str, Any] | None = None
    ) -> None:
        self.metrics.append(
            {"name": name, "value": value, "attributes": dict(attributes) if attributes else {}}
        )

    def reset(self) -> None:
        """Clear all recorded spans and metrics."""
        self._open.clear()
        self.spans.clear()
        self.metrics.clear()
