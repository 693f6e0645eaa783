"""
Batch ingest of a survey export.

Responsibilities:
- encoding detection + decode to text
- CSV row reading (header skipped)
- build -> normalize per row, then aggregate over the whole batch
- serialization of the four result artifacts

Any row-level error aborts the whole batch; nothing is written unless every
row parsed.
"""

from __future__ import annotations

import base64
import csv
import hashlib
import io
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from charset_normalizer import from_bytes

from .aggregate import aggregate
from .errors import IngestError
from .models import CsvArtifact, Report, Row
from .normalize import normalize_row
from .parse import build_row
from .rules import (
    INGESTED_JSON,
    NORMALIZED_CSV,
    NORMALIZED_JSON,
    RECORD_COLUMNS,
    REPORT_COLUMNS,
    REPORT_CSV,
)

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    ingested: List[Row] = field(default_factory=list)
    normalized: List[Row] = field(default_factory=list)
    report: Report = field(default_factory=dict)
    encoding: Dict[str, Any] = field(default_factory=dict)

    @property
    def rows(self) -> int:
        return len(self.normalized)

    @property
    def noted_values(self) -> int:
        return sum(1 for row in self.ingested for record in row.values() if record.notes)


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def decode_csv_bytes(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode an export to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - UTF-8 input with a BOM is decoded as utf-8-sig so the BOM never reaches
      the first header cell.
    - If decode fails, fall back to UTF-8, then to replacement characters.
    - Newlines are normalized to LF.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8")
            decode_used = "utf-8"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        decode_fallback = True

    if decode_fallback:
        logger.warning("could not decode input as %s, used %s", detected, decode_used)

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }


def read_rows(text: str) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield (line, cells) for each data row. ``line`` is the row's line in the
    file (the header is line 1) and is counted before blank lines are dropped.
    """
    reader = csv.reader(io.StringIO(text, newline=""))
    next(reader, None)
    for cells in reader:
        if cells:
            yield reader.line_num, cells


def ingest_rows(rows: Iterable[Sequence[str]]) -> IngestResult:
    """Ingest rows numbered by their position in ``rows``, starting at 1."""
    return ingest_numbered_rows(enumerate(rows, start=1))


def ingest_numbered_rows(rows: Iterable[Tuple[int, Sequence[str]]]) -> IngestResult:
    result = IngestResult()
    for number, cells in rows:
        try:
            parsed = build_row(cells)
        except IngestError as exc:
            exc.with_row(number)
            raise
        result.ingested.append(parsed)
        result.normalized.append(normalize_row(parsed))

    result.report = aggregate(result.normalized)
    logger.info("ingested %d rows (%d values needed recovery)", result.rows, result.noted_values)
    return result


def ingest_csv_bytes(raw: bytes) -> IngestResult:
    text, encoding = decode_csv_bytes(raw)
    result = ingest_numbered_rows(read_rows(text))
    result.encoding = encoding
    return result


def rows_to_documents(rows: Sequence[Row]) -> List[Dict[str, Dict[str, Any]]]:
    return [{item: record.model_dump() for item, record in row.items()} for row in rows]


def flatten_row(row: Row) -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for item, record in row.items():
        for column in RECORD_COLUMNS:
            flat[f"{item}_{column}"] = getattr(record, column)
    return flat


def flatten_report(report: Report) -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for item, entry in report.items():
        for column in REPORT_COLUMNS:
            flat[f"{item}_{column}"] = getattr(entry, column)
    return flat


def _csv_cell(value: Any, missing: str) -> str:
    if value is None:
        return missing
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_csv_text(records: Sequence[Dict[str, Any]], missing: str = "") -> str:
    if not records:
        return ""
    outp = io.StringIO(newline="")
    writer = csv.DictWriter(outp, fieldnames=list(records[0]), lineterminator="\n")
    writer.writeheader()
    for record in records:
        writer.writerow({k: _csv_cell(v, missing) for k, v in record.items()})
    return outp.getvalue()


def csv_artifact(text: str) -> CsvArtifact:
    data = text.encode("utf-8")
    return CsvArtifact(
        sha256=_sha256_hex(data),
        encoding="utf-8",
        content_b64=base64.b64encode(data).decode("ascii"),
    )


def write_artifacts(
    result: IngestResult,
    output_dir: Path,
    missing: str = "",
    indent: Optional[int] = 2,
) -> Dict[str, Path]:
    """
    Write the four result files. Everything is rendered before the first file
    is opened, and files written by this call are removed again if a later
    write fails, so an OSError leaves no partial output behind.
    """
    contents = {
        output_dir / INGESTED_JSON: json.dumps(
            rows_to_documents(result.ingested), indent=indent, allow_nan=False
        ),
        output_dir / NORMALIZED_JSON: json.dumps(
            rows_to_documents(result.normalized), indent=indent, allow_nan=False
        ),
        output_dir / NORMALIZED_CSV: to_csv_text(
            [flatten_row(row) for row in result.normalized], missing
        ),
        output_dir / REPORT_CSV: to_csv_text([flatten_report(result.report)], missing),
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    try:
        for path, text in contents.items():
            path.write_text(text, encoding="utf-8")
            written.append(path)
    except OSError:
        for path in written:
            path.unlink(missing_ok=True)
        raise

    for path in written:
        logger.info("wrote %s", path)
    return dict(zip(("ingested", "normalized", "flattened", "report"), written))
