from __future__ import annotations

from typing import Any, Dict, Optional


class IngestError(Exception):
    """A row that does not fit the survey schema. Fatal to the whole batch."""

    code = "INGEST_ERROR"

    def __init__(
        self,
        reason: str,
        *,
        row: Optional[int] = None,
        item: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[str] = None,
    ) -> None:
        self.reason = reason
        self.row = row
        self.item = item
        self.field = field
        self.value = value
        super().__init__(self.message)

    @property
    def message(self) -> str:
        where = []
        if self.row is not None:
            where.append(f"row {self.row}")
        if self.item is not None:
            where.append(f"item {self.item}")
        if self.field is not None:
            where.append(f"field {self.field}")
        if not where:
            return self.reason
        return f"{self.reason} ({', '.join(where)})"

    def with_row(self, row: int) -> "IngestError":
        self.row = row
        self.args = (self.message,)
        return self

    def to_detail(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "row": self.row,
            "item": self.item,
            "field": self.field,
            "value": self.value,
        }


class MalformedBooleanError(IngestError):
    code = "MALFORMED_BOOLEAN"

    def __init__(self, value: str, **context: Any) -> None:
        context.setdefault("field", "would_throw")
        super().__init__(f"malformed bool: {value!r}", value=value, **context)


class UnexpectedEndOfRowError(IngestError):
    code = "UNEXPECTED_END_OF_ROW"

    def __init__(self, needed: int, available: int, **context: Any) -> None:
        self.needed = needed
        self.available = available
        super().__init__(
            f"end of row: needed {needed} more cells, found {available}", **context
        )
