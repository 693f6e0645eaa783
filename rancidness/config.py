"""
Runtime configuration for the ingest tool and API.

Defaults can be overridden through environment variables so the batch tool
can be pointed at another export without code changes.
"""
import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Knobs shared by the CLI and the FastAPI app."""

    api_name: str = "rancidness-survey"
    api_version: str = "0.1.0"
    input_path: Path = Path(os.environ.get("RANCIDNESS_INPUT", "throwcsv.csv"))
    output_dir: Path = Path(os.environ.get("RANCIDNESS_OUTPUT_DIR", "."))
    log_level: str = os.environ.get("RANCIDNESS_LOG_LEVEL", "INFO")
    # Written into CSV cells for absent ratings; must never look like a number.
    csv_missing_value: str = os.environ.get("RANCIDNESS_CSV_MISSING", "")
    json_indent: int = Field(2, ge=0, le=8)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
