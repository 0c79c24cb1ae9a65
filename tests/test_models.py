"""Tests for attendee records, payload helpers and deltas."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from rosterkit.models.attendee import (
    AttendeeRecord,
    build_attendee,
    merge_attendee,
    user_fields,
    user_id,
)
from rosterkit.models.delta import RosterDelta
from rosterkit.models.enums import AttendeeKind, RosterDeltaType, UpdateReason


class TestEnums:
    def test_values(self) -> None:
        assert AttendeeKind.SCREEN_SHARE == "screen_share"
        assert UpdateReason.INFO == "info"
        assert RosterDeltaType.REPLACE == "replace"

    def test_enums_are_str(self) -> None:
        assert isinstance(AttendeeKind.REGULAR, str)


class TestAttendeeRecord:
    def test_defaults(self) -> None:
        record = AttendeeRecord(id="a")
        assert record.is_self is False
        assert record.kind == AttendeeKind.REGULAR
        assert record.has_shared_board is False

    def test_integer_id(self) -> None:
        assert AttendeeRecord(id=7).id == 7

    @pytest.mark.parametrize("bad_id", [None, True, 1.5, ["a"], {"x": 1}])
    def test_unusable_id_rejected(self, bad_id: object) -> None:
        with pytest.raises(ValidationError):
            AttendeeRecord.model_validate({"id": bad_id})

    def test_missing_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            build_attendee({"is_self": True})

    def test_malformed_flags_are_falsy(self) -> None:
        record = AttendeeRecord.model_validate(
            {"id": "a", "is_audio_on": "yes", "is_camera_on": None, "is_speaking": [1]}
        )
        assert record.is_audio_on is False
        assert record.is_camera_on is False
        assert record.is_speaking is False

    def test_integer_flags_follow_value(self) -> None:
        record = AttendeeRecord.model_validate({"id": "a", "is_audio_on": 1, "is_camera_on": 0})
        assert record.is_audio_on is True
        assert record.is_camera_on is False

    def test_unknown_kind_is_regular(self) -> None:
        assert AttendeeRecord.model_validate({"id": "a", "kind": "hologram"}).kind == (
            AttendeeKind.REGULAR
        )
        assert AttendeeRecord.model_validate({"id": "a", "kind": ["x"]}).kind == (
            AttendeeKind.REGULAR
        )

    def test_kind_from_string(self) -> None:
        record = AttendeeRecord.model_validate({"id": "a", "kind": "media_playback"})
        assert record.kind == AttendeeKind.MEDIA_PLAYBACK

    def test_shared_board_needs_both_fields(self) -> None:
        assert AttendeeRecord(id="a", board_id="b", board_time_span="1-2").has_shared_board
        assert not AttendeeRecord(id="a", board_id="b").has_shared_board
        assert not AttendeeRecord(id="a", board_time_span="1-2").has_shared_board
        assert not AttendeeRecord(id="a", board_id="", board_time_span="1-2").has_shared_board

    def test_non_string_board_fields_are_absent(self) -> None:
        record = AttendeeRecord.model_validate({"id": "a", "board_id": 3, "board_time_span": "1"})
        assert record.board_id is None
        assert record.has_shared_board is False

    def test_passive_fields_kept(self) -> None:
        record = build_attendee({"id": "a", "display_name": "Ann", "avatar": "ann.png"})
        assert record.model_extra == {"display_name": "Ann", "avatar": "ann.png"}
        assert record.display_name == "Ann"  # type: ignore[attr-defined]

    def test_frozen(self) -> None:
        record = AttendeeRecord(id="a")
        with pytest.raises(ValidationError):
            record.is_speaking = True  # type: ignore[misc]

    def test_dump_includes_derived_board_flag(self) -> None:
        data = AttendeeRecord(id="a", board_id="b", board_time_span="1").model_dump()
        assert data["has_shared_board"] is True


class TestPayloadHelpers:
    def test_mapping_payload(self) -> None:
        assert user_fields({"id": "a", "is_self": True}) == {"id": "a", "is_self": True}

    def test_model_payload_uses_set_fields(self) -> None:
        class User(BaseModel):
            id: str
            is_speaking: bool = False
            display_name: str | None = None

        assert user_fields(User(id="a", is_speaking=True)) == {"id": "a", "is_speaking": True}

    def test_record_payload_drops_derived_fields(self) -> None:
        record = AttendeeRecord(id="a", board_id="b", board_time_span="1")
        assert "has_shared_board" not in user_fields(record)

    def test_garbage_payload_is_empty(self) -> None:
        assert user_fields(None) == {}
        assert user_fields(42) == {}
        assert user_fields("a") == {}

    def test_non_string_keys_dropped(self) -> None:
        assert user_fields({"id": "a", 3: "x"}) == {"id": "a"}

    def test_user_id(self) -> None:
        assert user_id({"id": "a"}) == "a"
        assert user_id({"id": 0}) == 0
        assert user_id({"id": False}) is None
        assert user_id({"name": "a"}) is None
        assert user_id(None) is None


class TestMerge:
    def test_new_fields_override_and_absent_fields_kept(self) -> None:
        record = build_attendee({"id": "a", "is_audio_on": True, "display_name": "Ann"})
        merged = merge_attendee(record, {"is_camera_on": True, "display_name": "Annie"})
        assert merged.is_audio_on is True
        assert merged.is_camera_on is True
        assert merged.display_name == "Annie"  # type: ignore[attr-defined]

    def test_merge_returns_new_record(self) -> None:
        record = AttendeeRecord(id="a")
        merged = merge_attendee(record, {"is_speaking": True})
        assert merged is not record
        assert record.is_speaking is False

    def test_board_flag_recomputed(self) -> None:
        record = AttendeeRecord(id="a", board_id="b", board_time_span="1-2")
        assert merge_attendee(record, {"board_time_span": ""}).has_shared_board is False
        cleared = merge_attendee(record, {"board_id": None})
        assert cleared.has_shared_board is False

    def test_nested_model_and_dataclass_fields_keep_their_type(self) -> None:
        from dataclasses import dataclass

        class Avatar(BaseModel):
            url: str

        @dataclass
        class Badge:
            label: str

        record = build_attendee({"id": "a", "avatar": Avatar(url="a.png"), "badge": Badge("x")})
        merged = merge_attendee(record, {"display_name": "Ann"})
        assert isinstance(merged.avatar, Avatar)  # type: ignore[attr-defined]
        assert isinstance(merged.badge, Badge)  # type: ignore[attr-defined]

        class User(BaseModel):
            id: str
            avatar: Avatar

        fields = user_fields(User(id="b", avatar=Avatar(url="b.png")))
        assert fields["avatar"] == Avatar(url="b.png")
        assert isinstance(fields["avatar"], Avatar)


class TestRosterDelta:
    def test_constructors(self) -> None:
        record = AttendeeRecord(id="a")
        assert RosterDelta.new(0, record) == RosterDelta(RosterDeltaType.NEW, 0, record)
        assert RosterDelta.update(2, record).record is record
        assert RosterDelta.remove(1).record is None
        moved = RosterDelta.replace(3, 1)
        assert (moved.index, moved.new_index) == (3, 1)

    def test_to_dict(self) -> None:
        record = AttendeeRecord(id="a", kind=AttendeeKind.SCREEN_SHARE)
        data = RosterDelta.new(1, record).to_dict()
        assert data["type"] == "new"
        assert data["index"] == 1
        assert data["record"]["kind"] == "screen_share"
        assert "new_index" not in data
        assert RosterDelta.replace(2, 1).to_dict() == {
            "type": "replace",
            "index": 2,
            "new_index": 1,
        }
