"""Roster engine: keeps an ordered attendee list in sync with participant events."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from rosterkit.core.config import RosterConfig
from rosterkit.core.priority import attendee_priority
from rosterkit.models.attendee import (
    AttendeeId,
    AttendeeRecord,
    build_attendee,
    is_attendee_id,
    merge_attendee,
    user_fields,
    user_id,
)
from rosterkit.models.delta import DeltaCallback, RosterDelta
from rosterkit.models.enums import AttendeeKind, RosterDeltaType, UpdateReason
from rosterkit.telemetry.base import ROSTER_SIZE_METRIC, Attr, SpanKind, TelemetryProvider
from rosterkit.telemetry.config import TelemetryConfig
from rosterkit.telemetry.noop import NoopTelemetryProvider
from rosterkit.transport.base import ParticipantHandlers, ParticipantSource

logger = logging.getLogger("rosterkit.roster")


@dataclass
class _Listener:
    callback: DeltaCallback
    types: frozenset[RosterDeltaType] | None = None


class RosterEngine:
    """Ordered list of attendees, maintained from a stream of participant events.

    The engine subscribes to a :class:`ParticipantSource` on
    :meth:`initialize` and turns each joined, updated and left event into
    positional deltas (``new``, ``update``, ``remove``, ``replace``) that
    listeners apply to their own copy of the list.

    Ordering rules:

    * The local participant sits at position 0; its own screen share is
      inserted right after it.
    * New participants are appended. A repeated join only merges fields.
    * A state-change update of a remote participant may move it so that
      entries stay sorted by :func:`attendee_priority`. Ties keep their order.
    * Info updates and updates of the local participant never move anything.

    Handlers never raise. Unknown ids and malformed payloads are ignored,
    and so is anything arriving before :meth:`initialize` or after
    :meth:`release`.

    Example::

        source = InMemoryParticipantSource()
        with RosterEngine(source) as engine:
            engine.subscribe(print)
            source.join({"id": "me", "is_self": True})
    """

    def __init__(self, source: ParticipantSource, *, config: RosterConfig | None = None) -> None:
        self._source = source
        self._config = config or RosterConfig()
        telemetry_config = self._config.telemetry or TelemetryConfig()
        self._telemetry: TelemetryProvider = telemetry_config.provider or NoopTelemetryProvider()
        self._enabled_spans = telemetry_config.enabled_spans
        self._span_metadata = dict(telemetry_config.metadata)
        self._noop_telemetry = NoopTelemetryProvider()
        self._attendees: list[AttendeeRecord] = []
        self._listeners: dict[str, _Listener] = {}
        self._subscription_id: str | None = None

    # -- Lifecycle --------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._subscription_id is not None

    def initialize(self) -> None:
        """Subscribe to the participant source. Repeated calls do nothing."""
        if self.is_initialized:
            return

        logger.info("roster engine initialize")
        self._subscription_id = self._source.subscribe(
            ParticipantHandlers(
                on_joined=self.on_participant_joined,
                on_updated=self.on_participant_updated,
                on_left=self.on_participant_left,
            )
        )

    def release(self) -> None:
        """Unsubscribe, drop every listener and empty the roster.

        Repeated calls do nothing.
        """
        if not self.is_initialized:
            return

        logger.info("roster engine release")
        subscription_id = self._subscription_id
        self._subscription_id = None
        try:
            self._source.unsubscribe(subscription_id)  # type: ignore[arg-type]
        except Exception:
            logger.exception("Error unsubscribing roster engine from participant source")
        self._listeners.clear()
        self.reset()

    def reset(self) -> None:
        """Empty the roster without touching subscriptions or listeners."""
        self._attendees = []

    def __enter__(self) -> RosterEngine:
        self.initialize()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    # -- Listeners --------------------------------------------------------

    def subscribe(
        self,
        callback: DeltaCallback,
        types: Iterable[RosterDeltaType | str] | None = None,
    ) -> str:
        """Register *callback* for roster deltas.

        Args:
            callback: Called synchronously with each :class:`RosterDelta`.
            types: Only deliver these delta types (None = all).

        Returns:
            A subscription ID that can be used to unsubscribe.
        """
        sub_id = uuid4().hex
        wanted = frozenset(RosterDeltaType(t) for t in types) if types is not None else None
        self._listeners[sub_id] = _Listener(callback=callback, types=wanted)
        return sub_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """Remove a listener.

        Returns:
            True if the listener existed and was removed.
        """
        return self._listeners.pop(subscription_id, None) is not None

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    # -- Queries ----------------------------------------------------------

    def snapshot(self) -> tuple[AttendeeRecord, ...]:
        """Return the current roster, in order."""
        return tuple(self._attendees)

    def get(self, participant_id: AttendeeId) -> AttendeeRecord | None:
        index = self.index_of(participant_id)
        return self._attendees[index] if index is not None else None

    def index_of(self, participant_id: AttendeeId) -> int | None:
        for index, attendee in enumerate(self._attendees):
            if attendee.id == participant_id:
                return index
        return None

    def priority_of(self, participant_id: AttendeeId) -> int | None:
        attendee = self.get(participant_id)
        return attendee_priority(attendee) if attendee is not None else None

    def __len__(self) -> int:
        return len(self._attendees)

    def __iter__(self) -> Iterator[AttendeeRecord]:
        return iter(self.snapshot())

    def __contains__(self, participant_id: object) -> bool:
        return any(attendee.id == participant_id for attendee in self._attendees)

    # -- Participant events -----------------------------------------------

    def on_participant_joined(self, user: Any) -> None:
        """Add a participant, or merge a repeated join into the existing entry."""
        if not self._accepting("joined"):
            return

        fields = user_fields(user)
        uid = user_id(fields)
        if uid is None:
            logger.warning("Ignoring joined participant without a usable id")
            return

        logger.debug("roster participant joined %s", uid)
        telemetry = self._provider_for(SpanKind.ROSTER_JOIN)
        with telemetry.span(
            SpanKind.ROSTER_JOIN,
            "roster.join",
            attributes=self._span_attributes(uid),
            session_id=self._config.session_id,
        ) as span_id:
            index = self.index_of(uid)
            try:
                if index is None:
                    attendee = build_attendee(fields)
                else:
                    attendee = merge_attendee(self._attendees[index], fields)
            except ValueError:
                logger.warning("Ignoring malformed joined participant %s", uid)
                return

            if index is not None:
                # Joins are presence events, never ranking events
                self._attendees[index] = attendee
                self._emit(RosterDelta.update(index, attendee), telemetry, span_id)
                return

            index = len(self._attendees)
            if attendee.is_self and attendee.kind == AttendeeKind.SCREEN_SHARE:
                index = min(self._config.self_screen_share_index, len(self._attendees))
            self._attendees.insert(index, attendee)
            self._emit(RosterDelta.new(index, attendee), telemetry, span_id)
            self._record_size()

    def on_participant_updated(
        self,
        old_user: Any,
        new_user: Any,
        reason: UpdateReason | str = UpdateReason.STATE_CHANGE,
    ) -> None:
        """Merge new participant fields and move the entry if its priority changed.

        *old_user* is only logged; the engine's own copy is the merge base.
        """
        if not self._accepting("updated"):
            return

        fields = user_fields(new_user)
        uid = user_id(fields)
        if uid is None:
            logger.warning("Ignoring updated participant without a usable id")
            return

        logger.debug("roster participant updated %s (%s) from %r", uid, reason, old_user)
        telemetry = self._provider_for(SpanKind.ROSTER_UPDATE)
        attributes = self._span_attributes(uid)
        attributes[Attr.UPDATE_REASON] = str(reason)
        with telemetry.span(
            SpanKind.ROSTER_UPDATE,
            "roster.update",
            attributes=attributes,
            session_id=self._config.session_id,
        ) as span_id:
            index = self.index_of(uid)
            if index is None:
                logger.debug("Ignoring update for unknown participant %s", uid)
                return

            current = self._attendees[index]
            try:
                attendee = merge_attendee(current, fields)
            except ValueError:
                logger.warning("Ignoring malformed update for participant %s", uid)
                return

            if reason == UpdateReason.INFO or attendee.is_self:
                self._attendees[index] = attendee
                self._emit(RosterDelta.update(index, attendee), telemetry, span_id)
                return

            old_priority = attendee_priority(current)
            new_priority = attendee_priority(attendee)
            telemetry.set_attribute(span_id, Attr.ROSTER_OLD_PRIORITY, old_priority)
            telemetry.set_attribute(span_id, Attr.ROSTER_NEW_PRIORITY, new_priority)

            new_index = self._relocation_index(index, old_priority, new_priority)
            if new_index == index:
                self._attendees[index] = attendee
                self._emit(RosterDelta.update(index, attendee), telemetry, span_id)
                return

            del self._attendees[index]
            self._attendees.insert(new_index, attendee)
            self._emit(RosterDelta.update(index, attendee), telemetry, span_id)
            self._emit(RosterDelta.replace(index, new_index), telemetry, span_id)

    def on_participant_left(self, participant_id: Any) -> None:
        """Remove a participant. Accepts the id or a user payload carrying it."""
        if not self._accepting("left"):
            return

        uid = participant_id if is_attendee_id(participant_id) else user_id(participant_id)
        if uid is None:
            logger.warning("Ignoring left participant without a usable id")
            return

        logger.debug("roster participant left %s", uid)
        telemetry = self._provider_for(SpanKind.ROSTER_LEAVE)
        with telemetry.span(
            SpanKind.ROSTER_LEAVE,
            "roster.leave",
            attributes=self._span_attributes(uid),
            session_id=self._config.session_id,
        ) as span_id:
            index = self.index_of(uid)
            if index is None:
                logger.debug("Ignoring leave for unknown participant %s", uid)
                return

            del self._attendees[index]
            self._emit(RosterDelta.remove(index), telemetry, span_id)
            self._record_size()

    # -- Internals --------------------------------------------------------

    def _relocation_index(self, index: int, old_priority: int, new_priority: int) -> int:
        """Find where the entry at *index* belongs once its priority changes.

        Scans for the first entry ranked strictly behind *new_priority*,
        starting after the reserved head when moving forward and at the
        entry itself when moving back. The result is a position in the list
        with the entry already taken out.
        """
        if new_priority == old_priority:
            return index

        start = self._config.reserved_head if new_priority < old_priority else index
        for position in range(start, len(self._attendees)):
            if attendee_priority(self._attendees[position]) > new_priority:
                return position - 1 if position > index else position
        return len(self._attendees) - 1

    def _accepting(self, event: str) -> bool:
        if not self.is_initialized:
            logger.debug("roster engine not initialized, ignoring %s event", event)
            return False
        return True

    def _emit(self, delta: RosterDelta, telemetry: TelemetryProvider, span_id: str) -> None:
        logger.debug(
            "roster delta %s index=%d new_index=%s", delta.type, delta.index, delta.new_index
        )
        telemetry.record_delta(span_id, delta)

        for sub_id, listener in list(self._listeners.items()):
            if listener.types is not None and delta.type not in listener.types:
                continue
            try:
                listener.callback(delta)
            except Exception:
                logger.exception("Error in roster listener %s for %s delta", sub_id, delta.type)

    def _provider_for(self, kind: SpanKind) -> TelemetryProvider:
        if self._enabled_spans is not None and kind not in self._enabled_spans:
            return self._noop_telemetry
        return self._telemetry

    def _span_attributes(self, participant_id: AttendeeId) -> dict[str, Any]:
        attributes: dict[str, Any] = dict(self._span_metadata)
        attributes[Attr.PARTICIPANT_ID] = str(participant_id)
        return attributes

    def _record_size(self) -> None:
        self._telemetry.record_metric(
            ROSTER_SIZE_METRIC,
            float(len(self._attendees)),
            attributes=dict(self._span_metadata) or None,
        )
