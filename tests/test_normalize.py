import pytest

from rancidness.models import ItemRecord
from rancidness.normalize import clamp, normalize_record, normalize_row


@pytest.mark.parametrize("value, expected", [(0.0, 1.0), (-3.0, 1.0), (1.0, 1.0), (3.5, 3.5), (5.0, 5.0), (42.0, 5.0)])
def test_clamp(value, expected):
    assert clamp(value) == expected


def test_clamp_keeps_absent():
    assert clamp(None) is None


def test_normalize_record_only_touches_ratings():
    record = ItemRecord(would_throw=True, expected_rancidness=9.0, desired_rancidness=None, notes="like 9")
    normalized = normalize_record(record)
    assert normalized == ItemRecord(would_throw=True, expected_rancidness=5.0, desired_rancidness=None, notes="like 9")
    # source record is untouched
    assert record.expected_rancidness == 9.0


def test_normalize_is_idempotent():
    row = {
        "kiwi": ItemRecord(would_throw=False, expected_rancidness=-2.0, desired_rancidness=7.5),
        "lime": ItemRecord(would_throw=True, expected_rancidness=2.5, desired_rancidness=None, notes="?"),
    }
    once = normalize_row(row)
    assert normalize_row(once) == once
    assert list(once) == ["kiwi", "lime"]
    for record in once.values():
        for value in (record.expected_rancidness, record.desired_rancidness):
            assert value is None or 1.0 <= value <= 5.0
