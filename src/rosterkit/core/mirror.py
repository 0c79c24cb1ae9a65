"""Consumer-side copy of a roster, rebuilt from positional deltas."""

from __future__ import annotations

import logging

from rosterkit.models.attendee import AttendeeId, AttendeeRecord
from rosterkit.models.delta import RosterDelta
from rosterkit.models.enums import RosterDeltaType

logger = logging.getLogger("rosterkit.mirror")


class RosterMirrorError(Exception):
    """A delta does not fit the mirrored list."""


class RosterMirror:
    """Keeps its own list in step with a ``RosterEngine`` by applying deltas.

    This is what a UI store does with the engine's output. Instances are
    callable, so a mirror can be passed straight to
    :meth:`RosterEngine.subscribe`::

        mirror = RosterMirror()
        engine.subscribe(mirror)
    """

    def __init__(self) -> None:
        self._records: list[AttendeeRecord] = []
        self._applied = 0

    def __call__(self, delta: RosterDelta) -> None:
        self.apply(delta)

    def apply(self, delta: RosterDelta) -> None:
        """Apply one delta.

        Raises:
            RosterMirrorError: If the delta's indices or payload do not fit
                the current list.
        """
        if delta.type == RosterDeltaType.NEW:
            self._check_index(delta, delta.index, len(self._records))
            self._records.insert(delta.index, self._require_record(delta))
        elif delta.type == RosterDeltaType.UPDATE:
            self._check_index(delta, delta.index, len(self._records) - 1)
            self._records[delta.index] = self._require_record(delta)
        elif delta.type == RosterDeltaType.REMOVE:
            self._check_index(delta, delta.index, len(self._records) - 1)
            del self._records[delta.index]
        elif delta.type == RosterDeltaType.REPLACE:
            if delta.new_index is None:
                raise RosterMirrorError("replace delta without a destination index")
            self._check_index(delta, delta.index, len(self._records) - 1)
            self._check_index(delta, delta.new_index, len(self._records) - 1)
            # Move, not copy: the record was already refreshed by the preceding update
            self._records.insert(delta.new_index, self._records.pop(delta.index))
        else:
            raise RosterMirrorError(f"unknown delta type {delta.type!r}")
        self._applied += 1

    def clear(self) -> None:
        self._records = []

    @property
    def records(self) -> tuple[AttendeeRecord, ...]:
        return tuple(self._records)

    @property
    def ids(self) -> list[AttendeeId]:
        return [record.id for record in self._records]

    @property
    def applied_count(self) -> int:
        """Number of deltas applied since creation."""
        return self._applied

    def __len__(self) -> int:
        return len(self._records)

    @staticmethod
    def _require_record(delta: RosterDelta) -> AttendeeRecord:
        if delta.record is None:
            raise RosterMirrorError(f"{delta.type} delta without a record")
        return delta.record

    @staticmethod
    def _check_index(delta: RosterDelta, index: int, upper: int) -> None:
        if not 0 <= index <= upper:
            logger.warning("Out of range %s delta at %d (max %d)", delta.type, index, upper)
            raise RosterMirrorError(f"{delta.type} delta index {index} out of range 0..{upper}")
