"""Display priority of roster entries. Lower values sort earlier."""

from __future__ import annotations

from rosterkit.models.attendee import AttendeeRecord
from rosterkit.models.enums import AttendeeKind

SELF_PRIORITY = -9999
SELF_MEDIA_PLAYBACK_PRIORITY = -9998
SELF_SCREEN_SHARE_PRIORITY = -9997

AUDIO_WEIGHT = 2
CAMERA_WEIGHT = 4
SPEAKING_WEIGHT = 8
SHARED_BOARD_WEIGHT = 200


def attendee_priority(record: AttendeeRecord) -> int:
    """Return the display priority of *record*.

    The local participant always sorts first, ahead of its own screen share
    and media playback entries. Every other entry starts at zero and is pulled
    forward by its media state, a shared board outweighing everything else.
    """
    if record.is_self:
        if record.kind == AttendeeKind.SCREEN_SHARE:
            return SELF_SCREEN_SHARE_PRIORITY
        if record.kind == AttendeeKind.MEDIA_PLAYBACK:
            return SELF_MEDIA_PLAYBACK_PRIORITY
        return SELF_PRIORITY

    priority = 0
    if record.is_audio_on:
        priority -= AUDIO_WEIGHT
    if record.is_camera_on:
        priority -= CAMERA_WEIGHT
    if record.is_speaking:
        priority -= SPEAKING_WEIGHT
    if record.has_shared_board:
        priority -= SHARED_BOARD_WEIGHT
    return priority
