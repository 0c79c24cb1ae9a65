"""Roster engine configuration."""

from __future__ import annotations

from dataclasses import dataclass

from rosterkit.telemetry.config import TelemetryConfig


@dataclass
class RosterConfig:
    """Configuration for a ``RosterEngine``.

    Attributes:
        self_screen_share_index: Position a new self screen-share entry is
            inserted at, right after the local participant by default.
        reserved_head: Number of leading positions the relocation scan never
            targets. Position 0 belongs to the local participant.
        session_id: Optional session identifier attached to telemetry spans.
        telemetry: Telemetry settings. ``None`` disables telemetry.
    """

    self_screen_share_index: int = 1
    reserved_head: int = 1
    session_id: str | None = None
    telemetry: TelemetryConfig | None = None

    def __post_init__(self) -> None:
        if self.self_screen_share_index < 0:
            raise ValueError("self_screen_share_index must be >= 0")
        if self.reserved_head < 0:
            raise ValueError("reserved_head must be >= 0")
