"""Telemetry provider ABC, the roster Span, SpanKind enum, and Attr constants."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rosterkit.models.delta import RosterDelta

ROSTER_SIZE_METRIC = "rosterkit.roster.size"


class SpanKind(StrEnum):
    """One span kind per inbound participant event."""

    ROSTER_JOIN = "roster.join"
    ROSTER_UPDATE = "roster.update"
    ROSTER_LEAVE = "roster.leave"


class Attr:
    """Attribute keys set on roster spans."""

    # Participant
    PARTICIPANT_ID = "participant.id"
    UPDATE_REASON = "participant.update_reason"

    # Roster
    ROSTER_DELTA = "roster.delta"
    ROSTER_INDEX = "roster.index"
    ROSTER_NEW_INDEX = "roster.new_index"
    ROSTER_OLD_PRIORITY = "roster.old_priority"
    ROSTER_NEW_PRIORITY = "roster.new_priority"


@dataclass
class Span:
    """One handled participant event and the deltas it produced."""

    kind: SpanKind
    name: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:16])
    attributes: dict[str, Any] = field(default_factory=dict)
    deltas: list[RosterDelta] = field(default_factory=list)
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    end_time: datetime | None = None
    status: str = "ok"
    error_message: str | None = None
    session_id: str | None = None

    @property
    def participant_id(self) -> str | None:
        return self.attributes.get(Attr.PARTICIPANT_ID)

    @property
    def moved(self) -> bool:
        """True if the event relocated its participant."""
        return Attr.ROSTER_NEW_INDEX in self.attributes

    @property
    def duration_ms(self) -> float | None:
        """Duration in milliseconds, or None if not yet ended."""
        if self.end_time is None:
            return None
        delta = self.end_time - self.start_time
        return delta.total_seconds() * 1000


class TelemetryProvider(ABC):
    """Abstract base class for telemetry providers.

    The engine opens one span per handled participant event, reports every
    delta it emits inside that span through :meth:`record_delta`, and records
    the roster size after each join and leave. The default
    ``NoopTelemetryProvider`` has zero overhead.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for identification."""
        ...

    @abstractmethod
    def start_span(
        self,
        kind: SpanKind,
        name: str,
        *,
        attributes: dict[str, Any] | None = None,
        session_id: str | None = None,
    ) -> str:
        """Start a new telemetry span.

        Returns:
            A unique span ID string.
        """
        ...

    @abstractmethod
    def end_span(
        self,
        span_id: str,
        *,
        status: str = "ok",
        error_message: str | None = None,
    ) -> None:
        """End a previously started span."""
        ...

    @abstractmethod
    def set_attribute(self, span_id: str, key: str, value: Any) -> None:
        """Set an attribute on an active span."""
        ...

    @abstractmethod
    def record_metric(
        self,
        name: str,
        value: float,
        *,
        attributes: dict[str, Any] | None = None,
    ) -> None:
        """Record a metric value."""
        ...

    def record_delta(self, span_id: str, delta: RosterDelta) -> None:
        """Attach an emitted delta to a span.

        The ``roster.*`` attributes describe the last delta of the span, so
        a move reports its ``replace`` and both indices.
        """
        self.set_attribute(span_id, Attr.ROSTER_DELTA, delta.type.value)
        self.set_attribute(span_id, Attr.ROSTER_INDEX, delta.index)
        if delta.new_index is not None:
            self.set_attribute(span_id, Attr.ROSTER_NEW_INDEX, delta.new_index)

    @contextmanager
    def span(
        self,
        kind: SpanKind,
        name: str,
        **kwargs: Any,
    ) -> Generator[str, None, None]:
        """Context manager for span lifecycle.

        Yields the span ID. Automatically ends the span on exit,
        recording error status if an exception occurs.
        """
        span_id = self.start_span(kind, name, **kwargs)
        try:
            yield span_id
            self.end_span(span_id)
        except Exception as exc:
            self.end_span(span_id, status="error", error_message=str(exc))
            raise
