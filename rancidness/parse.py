"""
Tolerant cell parsing.

Responsibilities:
- strict Yes/No flags (anything else is fatal)
- best-effort scale values: strict decimal, then first embedded number, then give up
- provenance notes for every value that needed recovery
- assembling one record per tracked item from a flat row of cells
"""

from __future__ import annotations

import logging
import math
import re
from typing import NamedTuple, Optional, Sequence, Tuple

from .errors import MalformedBooleanError, UnexpectedEndOfRowError
from .models import ItemRecord, Row
from .rules import (
    CELLS_PER_ITEM,
    FALSE_TOKEN,
    FRESH_VALUE,
    FRESH_WORD,
    ITEM_NAMES,
    METADATA_COLUMNS,
    NOTE_SEPARATOR,
    TRUE_TOKEN,
)

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")
# Comma is allowed but not required before the last digit group, e.g. "1,5".
_EMBEDDED_NUMBER = re.compile(r"-?[0-9]*\.?,?[0-9]+")


class ParsedValue(NamedTuple):
    value: Optional[float]
    note: Optional[str] = None

    @property
    def clean(self) -> bool:
        return self.note is None

    @property
    def recovered(self) -> bool:
        return self.value is not None and self.note is not None


def parse_scale_value(text: str) -> ParsedValue:
    """
    Parse one rating cell.

    Returns (value, None) for a clean decimal, (value, text) when a number had
    to be dug out of prose, and (None, text) when nothing usable was found.
    Numbers too large for a float count as nothing usable. Never raises.
    """
    stripped = text.strip()
    if _DECIMAL.fullmatch(stripped):
        value = float(stripped)
        if math.isfinite(value):
            return ParsedValue(value)
        return ParsedValue(None, text)

    match = _EMBEDDED_NUMBER.search(text)
    if match is not None:
        value = float(match.group(0).replace(",", ""))
        if math.isfinite(value):
            return ParsedValue(value, text)

    return ParsedValue(None, text)


def parse_bool(text: str, **context) -> bool:
    if text == TRUE_TOKEN:
        return True
    if text == FALSE_TOKEN:
        return False
    raise MalformedBooleanError(text, **context)


def _resolve_rating(parsed: ParsedValue) -> Optional[float]:
    if parsed.value is None and FRESH_WORD in (parsed.note or "").lower():
        return FRESH_VALUE
    return parsed.value


def build_record(
    cells: Sequence[str],
    position: int = 0,
    item: Optional[str] = None,
    row: Optional[int] = None,
) -> Tuple[ItemRecord, int]:
    """
    Consume the next three cells (flag, expected, desired) starting at
    ``position`` and return the record plus the advanced position.
    """
    available = len(cells) - position
    if available < CELLS_PER_ITEM:
        raise UnexpectedEndOfRowError(CELLS_PER_ITEM, max(available, 0), row=row, item=item)

    flag, expected_text, desired_text = cells[position : position + CELLS_PER_ITEM]
    would_throw = parse_bool(flag, row=row, item=item)

    notes = ""
    expected = parse_scale_value(expected_text)
    if expected.note is not None:
        notes += expected.note

    separator = NOTE_SEPARATOR if notes else ""
    desired = parse_scale_value(desired_text)
    if desired.note is not None:
        notes += separator + desired.note

    record = ItemRecord(
        would_throw=would_throw,
        expected_rancidness=_resolve_rating(expected),
        desired_rancidness=_resolve_rating(desired),
        notes=notes,
    )
    if notes:
        logger.debug("row %s %s: recovered %r", row, item, notes)
    return record, position + CELLS_PER_ITEM


def build_row(cells: Sequence[str], row: Optional[int] = None) -> Row:
    """Build one record per tracked item; the metadata columns are skipped here."""
    if len(cells) < METADATA_COLUMNS:
        raise UnexpectedEndOfRowError(METADATA_COLUMNS, len(cells), row=row)

    records: Row = {}
    position = METADATA_COLUMNS
    for item in ITEM_NAMES:
        records[item], position = build_record(cells, position, item=item, row=row)
    return records
