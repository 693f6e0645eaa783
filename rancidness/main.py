import logging

from fastapi import FastAPI, UploadFile, File, HTTPException
from .config import get_settings
from .errors import IngestError
from .ingest import (
    csv_artifact,
    flatten_report,
    flatten_row,
    ingest_csv_bytes,
    to_csv_text,
)
from .models import HealthResponse, IngestResponse, IngestSummary
from .rules import ITEM_NAMES

logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(
    title=settings.api_name,
    description="Tolerant ingest of the produce rancidness survey",
    version=settings.api_version,
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/ingest", response_model=IngestResponse)
async def ingest_survey(file: UploadFile = File(...)):
    if not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    try:
        result = ingest_csv_bytes(raw)
    except IngestError as exc:
        logger.exception("Survey ingest FAILED for %s", file.filename)
        raise HTTPException(status_code=422, detail=exc.to_detail()) from exc

    missing = settings.csv_missing_value
    return IngestResponse(
        summary=IngestSummary(
            rows=result.rows,
            items=len(ITEM_NAMES),
            noted_values=result.noted_values,
            detected_encoding=result.encoding.get("detected"),
        ),
        ingested=result.ingested,
        normalized=result.normalized,
        report=result.report,
        flattened_csv=csv_artifact(
            to_csv_text([flatten_row(row) for row in result.normalized], missing)
        ),
        report_csv=csv_artifact(to_csv_text([flatten_report(result.report)], missing)),
    )
