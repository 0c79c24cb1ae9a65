"""Attendee record model and helpers for inbound participant payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from rosterkit.models.enums import AttendeeKind

AttendeeId = str | int

# Derived on every record; never accepted from the transport
_DERIVED_FIELDS = frozenset({"has_shared_board"})


def is_attendee_id(value: Any) -> bool:
    return isinstance(value, (str, int)) and not isinstance(value, bool)


class AttendeeRecord(BaseModel):
    """One entry of the roster, either a real participant or a pseudo-participant.

    Records are immutable snapshots. The engine replaces a record with a
    merged copy whenever the transport reports new fields, so a record handed
    to a listener never changes under it.

    Fields the transport sends beyond the ones declared here (display name,
    avatar, ...) are kept verbatim as extra fields and ignored by ordering.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: AttendeeId
    is_self: bool = False
    kind: AttendeeKind = AttendeeKind.REGULAR
    is_audio_on: bool = False
    is_camera_on: bool = False
    is_speaking: bool = False
    board_id: str | None = None
    board_time_span: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _validate_id(cls, v: Any) -> AttendeeId:
        if not is_attendee_id(v):
            raise ValueError("attendee id must be a string or an integer")
        return v

    @field_validator("is_self", "is_audio_on", "is_camera_on", "is_speaking", mode="before")
    @classmethod
    def _coerce_flag(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        if isinstance(v, int):
            return v != 0
        return False

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, v: Any) -> AttendeeKind:
        try:
            return AttendeeKind(v)
        except (TypeError, ValueError):
            return AttendeeKind.REGULAR

    @field_validator("board_id", "board_time_span", mode="before")
    @classmethod
    def _coerce_board_field(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_shared_board(self) -> bool:
        """True when both a board id and a non-empty board time span are set."""
        return bool(self.board_id) and bool(self.board_time_span)


def user_fields(user: Any) -> dict[str, Any]:
    """Return the fields present on an inbound user payload.

    Accepts a mapping or a pydantic model. Anything else is treated as an
    empty payload. Derived fields and non-string keys are dropped.
    """
    if isinstance(user, BaseModel):
        # By attribute, so nested models and dataclasses keep their type
        names = set(user.model_fields_set) | set(user.model_extra or {})
        data: Mapping[Any, Any] = {name: getattr(user, name) for name in names}
    elif isinstance(user, Mapping):
        data = user
    else:
        return {}
    return {k: v for k, v in data.items() if isinstance(k, str) and k not in _DERIVED_FIELDS}


def user_id(user: Any) -> AttendeeId | None:
    """Extract a usable participant id from an inbound user payload."""
    uid = user_fields(user).get("id")
    return uid if is_attendee_id(uid) else None


def build_attendee(fields: Mapping[str, Any]) -> AttendeeRecord:
    """Create a record from inbound fields.

    Raises:
        pydantic.ValidationError: If the fields carry no usable id.
    """
    return AttendeeRecord.model_validate(dict(fields))


def merge_attendee(record: AttendeeRecord, fields: Mapping[str, Any]) -> AttendeeRecord:
    """Return a copy of *record* with *fields* layered on top.

    Fields present in *fields* override the record; absent fields are kept.
    ``has_shared_board`` is recomputed from the merged board fields.
    """
    merged = {k: v for k, v in record if k not in _DERIVED_FIELDS}
    merged.update(fields)
    return AttendeeRecord.model_validate(merged)
