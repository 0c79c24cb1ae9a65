"""Shared test fixtures and helpers."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from rosterkit.core.mirror import RosterMirror
from rosterkit.core.roster import RosterEngine
from rosterkit.models.delta import RosterDelta
from rosterkit.models.enums import AttendeeKind
from rosterkit.transport.memory import InMemoryParticipantSource


class DeltaRecorder:
    """Listener that keeps every delta it receives."""

    def __init__(self) -> None:
        self.deltas: list[RosterDelta] = []

    def __call__(self, delta: RosterDelta) -> None:
        self.deltas.append(delta)

    def shapes(self) -> list[tuple[Any, ...]]:
        """Deltas as ``(type, index[, id | new_index])`` tuples for compact asserts."""
        result: list[tuple[Any, ...]] = []
        for delta in self.deltas:
            if delta.record is not None:
                result.append((delta.type.value, delta.index, delta.record.id))
            elif delta.new_index is not None:
                result.append((delta.type.value, delta.index, delta.new_index))
            else:
                result.append((delta.type.value, delta.index))
        return result

    def clear(self) -> None:
        self.deltas.clear()


def make_user(uid: str | int, **fields: Any) -> dict[str, Any]:
    return {"id": uid, **fields}


def make_self(uid: str | int = "me", **fields: Any) -> dict[str, Any]:
    return {"id": uid, "is_self": True, **fields}


def make_screen_share(uid: str | int = "me-share", **fields: Any) -> dict[str, Any]:
    return {"id": uid, "is_self": True, "kind": AttendeeKind.SCREEN_SHARE, **fields}


@pytest.fixture
def source() -> InMemoryParticipantSource:
    return InMemoryParticipantSource()


@pytest.fixture
def engine(source: InMemoryParticipantSource) -> Iterator[RosterEngine]:
    engine = RosterEngine(source)
    engine.initialize()
    yield engine
    engine.release()


@pytest.fixture
def recorder(engine: RosterEngine) -> DeltaRecorder:
    recorder = DeltaRecorder()
    engine.subscribe(recorder)
    return recorder


@pytest.fixture
def mirror(engine: RosterEngine) -> RosterMirror:
    mirror = RosterMirror()
    engine.subscribe(mirror)
    return mirror
