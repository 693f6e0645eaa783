from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ItemRecord(BaseModel):
    """One respondent's answer for one produce item."""

    model_config = ConfigDict(frozen=True)

    would_throw: bool
    expected_rancidness: Optional[float] = None
    desired_rancidness: Optional[float] = None
    notes: str = ""


class ItemReport(BaseModel):
    would_throw_count: int = 0
    would_not_throw_count: int = 0
    average_expected_rancidness: float = 0.0
    average_desired_rancidness: float = 0.0


# item name -> record, insertion order is the survey column order
Row = Dict[str, ItemRecord]
Report = Dict[str, ItemReport]


class CsvArtifact(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    content_b64: str


class IngestSummary(BaseModel):
    rows: int = 0
    items: int = 0
    noted_values: int = Field(default=0, description="Records carrying a provenance note")
    detected_encoding: Optional[str] = Field(default=None, examples=["utf-8"])


class IngestResponse(BaseModel):
    summary: IngestSummary
    ingested: List[Dict[str, ItemRecord]] = Field(default_factory=list)
    normalized: List[Dict[str, ItemRecord]] = Field(default_factory=list)
    report: Dict[str, ItemReport] = Field(default_factory=dict)
    flattened_csv: CsvArtifact
    report_csv: CsvArtifact


class HealthResponse(BaseModel):
    ok: bool = True
