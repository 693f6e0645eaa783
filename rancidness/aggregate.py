from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .models import ItemRecord, ItemReport, Report, Row
from .rules import ITEM_NAMES


def running_average(values: Iterable[Optional[float]]) -> float:
    """
    Streaming mean over the present values; absent ones are skipped and do not
    count toward the denominator. Starts (and stays, if nothing is present) at 0.
    """
    average = 0.0
    seen = 0
    for value in values:
        if value is None:
            continue
        seen += 1
        average = (value + average * (seen - 1)) / seen
    return average


def report_item(records: Sequence[ItemRecord]) -> ItemReport:
    would_throw = sum(1 for r in records if r.would_throw)
    return ItemReport(
        would_throw_count=would_throw,
        would_not_throw_count=len(records) - would_throw,
        average_expected_rancidness=running_average(r.expected_rancidness for r in records),
        average_desired_rancidness=running_average(r.desired_rancidness for r in records),
    )


def aggregate(rows: Sequence[Row]) -> Report:
    """One report entry per tracked item, in survey column order."""
    return {item: report_item([row[item] for row in rows]) for item in ITEM_NAMES}
