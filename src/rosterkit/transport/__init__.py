"""Participant event sources feeding the roster engine."""

from rosterkit.transport.base import (
    JoinedCallback,
    LeftCallback,
    ParticipantHandlers,
    ParticipantSource,
    UpdatedCallback,
)
from rosterkit.transport.memory import InMemoryParticipantSource

__all__ = [
    "InMemoryParticipantSource",
    "JoinedCallback",
    "LeftCallback",
    "ParticipantHandlers",
    "ParticipantSource",
    "UpdatedCallback",
]
