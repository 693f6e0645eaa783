"""
Post-parse normalization.

Clamping to the documented scale is the only change made to numbers after
parsing. Flags and notes pass through untouched.
"""

from __future__ import annotations

from typing import Optional

from .models import ItemRecord, Row
from .rules import SCALE_MAX, SCALE_MIN


def clamp(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return min(max(value, SCALE_MIN), SCALE_MAX)


def normalize_record(record: ItemRecord) -> ItemRecord:
    return record.model_copy(
        update={
            "expected_rancidness": clamp(record.expected_rancidness),
            "desired_rancidness": clamp(record.desired_rancidness),
        }
    )


def normalize_row(row: Row) -> Row:
    return {item: normalize_record(record) for item, record in row.items()}
