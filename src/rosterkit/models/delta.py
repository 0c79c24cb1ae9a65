"""Positional delta emitted by the roster engine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rosterkit.models.attendee import AttendeeRecord
from rosterkit.models.enums import RosterDeltaType


@dataclass(frozen=True)
class RosterDelta:
    """One positional change of the roster.

    ``NEW`` and ``UPDATE`` carry ``index`` and ``record``. ``REMOVE`` carries
    only ``index``. ``REPLACE`` carries ``index`` (the position the record was
    last reported at) and ``new_index`` (the position it moved to).
    """

    type: RosterDeltaType
    """What happened."""

    index: int
    """Position the delta applies to, before the change for REMOVE and REPLACE."""

    record: AttendeeRecord | None = None
    """Snapshot of the record, for NEW and UPDATE."""

    new_index: int | None = None
    """Destination position, for REPLACE."""

    @classmethod
    def new(cls, index: int, record: AttendeeRecord) -> RosterDelta:
        return cls(type=RosterDeltaType.NEW, index=index, record=record)

    @classmethod
    def update(cls, index: int, record: AttendeeRecord) -> RosterDelta:
        return cls(type=RosterDeltaType.UPDATE, index=index, record=record)

    @classmethod
    def remove(cls, index: int) -> RosterDelta:
        return cls(type=RosterDeltaType.REMOVE, index=index)

    @classmethod
    def replace(cls, old_index: int, new_index: int) -> RosterDelta:
        return cls(type=RosterDeltaType.REPLACE, index=old_index, new_index=new_index)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data: dict[str, Any] = {"type": self.type.value, "index": self.index}
        if self.record is not None:
            data["record"] = self.record.model_dump(mode="json")
        if self.new_index is not None:
            data["new_index"] = self.new_index
        return data


DeltaCallback = Callable[[RosterDelta], Any]
