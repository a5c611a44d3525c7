"""
Unit tests for FitnessMedia data models.

Tests the Pydantic models including validation, the color blob encoding
and the box record format.
"""

import base64
import json
import random
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from fitnessmedia.exceptions import BoxDecodeError
from fitnessmedia.models.box import Box, decode_boxes, encode_boxes
from fitnessmedia.models.color import RED, WHITE, Color
from fitnessmedia.models.health import HealthDataType, HealthSample, HealthSnapshot
from fitnessmedia.models.profile import UserProfile


class TestColor:
    """Test cases for the Color model."""

    def test_channel_validation(self):
        """Channels must be within [0, 1]."""
        Color(red=0.0, green=0.5, blue=1.0)

        with pytest.raises(ValidationError):
            Color(red=1.5, green=0.0, blue=0.0)

        with pytest.raises(ValidationError):
            Color(red=0.0, green=-0.1, blue=0.0)

    def test_random_channels_in_range(self):
        """Random colors stay within range and vary per channel."""
        rng = random.Random(7)
        colors = [Color.random(rng) for _ in range(50)]

        for color in colors:
            assert 0.0 <= color.red <= 1.0
            assert 0.0 <= color.green <= 1.0
            assert 0.0 <= color.blue <= 1.0

        assert len({c.red for c in colors}) > 1
        assert any(c.red != c.green for c in colors)

    def test_random_is_reproducible_with_seed(self):
        assert Color.random(random.Random(3)) == Color.random(random.Random(3))

    def test_data_is_tagged_json(self):
        """The blob is a tagged JSON object of the three channels."""
        payload = json.loads(RED.to_data().decode("utf-8"))

        assert payload == {"type": "rgb", "red": 1.0, "green": 0.0, "blue": 0.0}
        assert Color.from_data(RED.to_data()) == RED

    def test_from_data_rejects_invalid_blobs(self):
        invalid_blobs = [
            b"\xff\xfe",
            b"not json",
            b"[1, 2, 3]",
            b'{"red": 1, "green": 0, "blue": 0}',
            b'{"type": "rgb", "red": 2, "green": 0, "blue": 0}',
            b'{"type": "rgb", "red": 1}',
        ]

        for blob in invalid_blobs:
            with pytest.raises(ValueError):
                Color.from_data(blob)

    def test_to_hex(self):
        assert WHITE.to_hex() == "#FFFFFF"
        assert RED.to_hex() == "#FF0000"
        assert Color(red=0.0, green=0.0, blue=0.0).to_hex() == "#000000"

    def test_color_is_immutable(self):
        with pytest.raises(ValidationError):
            RED.red = 0.5


class TestBox:
    """Test cases for the Box model."""

    def test_create_generates_unique_ids(self):
        box1 = Box.create("Gym", RED)
        box2 = Box.create("Gym", RED)

        assert isinstance(box1.id, UUID)
        assert box1.id != box2.id
        assert box1.title == "Gym"
        assert box1.color == RED

    def test_record_format(self):
        """Records carry the id string, title and base64 color blob."""
        box = Box.create("Gym", RED)
        record = box.to_record()

        assert record["id"] == str(box.id)
        assert record["title"] == "Gym"
        assert base64.b64decode(record["colorData"]) == RED.to_data()
        assert Box.from_record(record) == box

    def test_colorData_alias(self):
        box = Box(title="Alias", colorData=RED.to_data())
        assert box.color == RED

    def test_undecodable_color_falls_back_to_white(self):
        box = Box(title="Broken", color_data=b"garbage")
        assert box.color == WHITE

    def test_deeply_nested_color_falls_back_to_white(self):
        box = Box(title="Deep", color_data=b"[" * 100000)
        assert box.color == WHITE

    def test_from_record_rejects_malformed_records(self):
        good = Box.create("Gym", RED).to_record()
        malformed = [
            "not a dict",
            {**good, "colorData": "***"},
            {**good, "colorData": None},
            {**good, "id": "not-a-uuid"},
            {key: value for key, value in good.items() if key != "title"},
        ]

        for record in malformed:
            with pytest.raises(BoxDecodeError):
                Box.from_record(record)

    def test_box_is_immutable(self):
        box = Box.create("Gym", RED)
        with pytest.raises(ValidationError):
            box.title = "Pool"


class TestBoxListEncoding:
    """Test cases for the stored box list format."""

    def test_encoded_list_is_json_array(self):
        boxes = [Box.create("One", RED), Box.create("Two", WHITE)]
        records = json.loads(encode_boxes(boxes))

        assert [r["title"] for r in records] == ["One", "Two"]
        assert decode_boxes(encode_boxes(boxes)) == boxes

    def test_empty_list(self):
        assert encode_boxes([]) == b"[]"
        assert decode_boxes(b"[]") == []

    def test_decode_rejects_non_arrays_and_garbage(self):
        for data in (b"{}", b"nope", b"\x00\xff", b'"boxes"'):
            with pytest.raises(BoxDecodeError):
                decode_boxes(data)

    def test_decode_rejects_duplicate_ids(self):
        box = Box.create("One", RED)
        data = json.dumps([box.to_record(), box.to_record()]).encode("utf-8")

        with pytest.raises(BoxDecodeError):
            decode_boxes(data)

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode_boxes(b"nope")

    def test_decode_rejects_deeply_nested_json(self):
        with pytest.raises(BoxDecodeError):
            decode_boxes(b"[" * 100000)


class TestHealthModels:
    """Test cases for health samples and snapshots."""

    def test_snapshot_defaults(self):
        snapshot = HealthSnapshot()

        assert snapshot.date_of_birth is None
        assert snapshot.steps == 0
        assert snapshot.active_energy_burned == 0.0

    def test_sample_requires_quantity_type(self):
        start = datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)

        with pytest.raises(ValidationError):
            HealthSample(
                data_type=HealthDataType.DATE_OF_BIRTH,
                value=1,
                start_date=start,
                end_date=start,
            )

    def test_sample_requires_aware_ordered_dates(self):
        start = datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)

        with pytest.raises(ValidationError):
            HealthSample(
                data_type=HealthDataType.STEP_COUNT,
                value=10,
                start_date=start.replace(tzinfo=None),
                end_date=start.replace(tzinfo=None),
            )

        with pytest.raises(ValidationError):
            HealthSample(
                data_type=HealthDataType.STEP_COUNT,
                value=10,
                start_date=start,
                end_date=start - timedelta(minutes=1),
            )

    def test_sample_rejects_negative_values(self):
        start = datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)
        with pytest.raises(ValidationError):
            HealthSample(
                data_type=HealthDataType.STEP_COUNT,
                value=-1,
                start_date=start,
                end_date=start,
            )


class TestUserProfile:
    def test_default_profile_is_unset(self):
        assert UserProfile().name == ""
        assert not UserProfile().is_set
        assert UserProfile(name="Sam").is_set
