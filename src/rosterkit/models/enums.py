"""All string enums for rosterkit."""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class AttendeeKind(StrEnum):
    REGULAR = "regular"
    SCREEN_SHARE = "screen_share"
    MEDIA_PLAYBACK = "media_playback"


@unique
class UpdateReason(StrEnum):
    # Display name, avatar and similar fields; never moves a record
    INFO = "info"
    # Media, speaking or board state; may move a record
    STATE_CHANGE = "state_change"


@unique
class RosterDeltaType(StrEnum):
    NEW = "new"
    UPDATE = "update"
    REMOVE = "remove"
    REPLACE = "replace"
