import pytest

from conftest import make_cells
from rancidness.aggregate import aggregate, report_item, running_average
from rancidness.models import ItemRecord
from rancidness.normalize import normalize_row
from rancidness.parse import build_row
from rancidness.rules import ITEM_NAMES


def test_running_average_skips_absent():
    assert running_average([2.0, None, 4.0]) == 3.0


def test_running_average_of_nothing_is_zero():
    assert running_average([]) == 0.0
    assert running_average([None, None]) == 0.0


def test_running_average_matches_sum_over_count():
    values = [1.0, 2.5, 5.0, 3.25, 4.0, 1.5]
    assert running_average(values) == pytest.approx(sum(values) / len(values))


def test_report_item_counts_and_averages():
    records = [
        ItemRecord(would_throw=True, expected_rancidness=2.0, desired_rancidness=None),
        ItemRecord(would_throw=False, expected_rancidness=4.0, desired_rancidness=None),
        ItemRecord(would_throw=True, expected_rancidness=None, desired_rancidness=None, notes="?"),
    ]
    entry = report_item(records)
    assert entry.would_throw_count == 2
    assert entry.would_not_throw_count == 1
    assert entry.average_expected_rancidness == 3.0
    assert entry.average_desired_rancidness == 0.0


def test_aggregate_counts_cover_every_row():
    rows = [
        normalize_row(build_row(make_cells({"avocado": ("Yes", "5", "1")}))),
        normalize_row(build_row(make_cells())),
        normalize_row(build_row(make_cells({"avocado": ("Yes", "9", "x")}))),
    ]
    report = aggregate(rows)
    assert list(report) == list(ITEM_NAMES)
    for entry in report.values():
        assert entry.would_throw_count + entry.would_not_throw_count == len(rows)
    assert report["avocado"].would_throw_count == 2
    # 9 clamps to 5 before averaging; "x" is absent
    assert report["avocado"].average_expected_rancidness == pytest.approx(13 / 3)
    assert report["avocado"].average_desired_rancidness == pytest.approx(1.5)


def test_aggregate_no_rows():
    report = aggregate([])
    assert report["chard"].would_throw_count == 0
    assert report["chard"].average_expected_rancidness == 0.0
