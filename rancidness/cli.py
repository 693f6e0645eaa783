from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import get_settings
from .errors import IngestError
from .ingest import ingest_csv_bytes, write_artifacts

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Parse the produce rancidness survey and write normalized results plus a per-item report."
    )
    parser.add_argument("--input", type=Path, default=settings.input_path, help="Survey CSV export")
    parser.add_argument("--output-dir", type=Path, default=settings.output_dir, help="Where result files go")
    parser.add_argument("--log-level", default=settings.log_level, help="DEBUG shows every recovered value")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s: %(message)s")

    try:
        raw = args.input.read_bytes()
    except OSError as exc:
        logger.error("cannot read %s: %s", args.input, exc)
        return 1

    try:
        result = ingest_csv_bytes(raw)
    except IngestError as exc:
        logger.error("data ingest error: %s", exc)
        return 1

    try:
        write_artifacts(
            result,
            args.output_dir,
            missing=settings.csv_missing_value,
            indent=settings.json_indent,
        )
    except OSError as exc:
        logger.error("cannot write results to %s: %s", args.output_dir, exc)
        return 1
    logger.info("report covers %d rows across %d items", result.rows, len(result.report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
