"""rosterkit - ordered attendee roster driven by live participant events."""

from rosterkit._version import __version__
from rosterkit.core.config import RosterConfig
from rosterkit.core.mirror import RosterMirror, RosterMirrorError
from rosterkit.core.priority import attendee_priority
from rosterkit.core.roster import ROSTER_SIZE_METRIC, RosterEngine
from rosterkit.models.attendee import AttendeeId, AttendeeRecord
from rosterkit.models.delta import DeltaCallback, RosterDelta
from rosterkit.models.enums import AttendeeKind, RosterDeltaType, UpdateReason
from rosterkit.telemetry import (
    MockTelemetryProvider,
    NoopTelemetryProvider,
    TelemetryConfig,
    TelemetryProvider,
)
from rosterkit.transport import (
    InMemoryParticipantSource,
    ParticipantHandlers,
    ParticipantSource,
)

__all__ = [
    "ROSTER_SIZE_METRIC",
    "AttendeeId",
    "AttendeeKind",
    "AttendeeRecord",
    "DeltaCallback",
    "InMemoryParticipantSource",
    "MockTelemetryProvider",
    "NoopTelemetryProvider",
    "ParticipantHandlers",
    "ParticipantSource",
    "RosterConfig",
    "RosterDelta",
    "RosterDeltaType",
    "RosterEngine",
    "RosterMirror",
    "RosterMirrorError",
    "TelemetryConfig",
    "TelemetryProvider",
    "UpdateReason",
    "__version__",
    "attendee_priority",
]
