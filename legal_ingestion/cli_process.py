from __future__ import annotations

import argparse
from pathlib import Path

from common.config import yaml_config
from common.logger import get_logger
from legal_ingestion.ingest_pipeline import analyze_results, ingest_folder

log = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Classify, segment and deduplicate extracted Arabic legal documents."
    )
    parser.add_argument(
        "--input_dir",
        type=str,
        default=str(yaml_config.app.data_dir),
        help="Folder with extracted TXT/MD files",
    )
    parser.add_argument(
        "--output_dir",
        type=str,
        default=str(yaml_config.app.output_dir),
        help="Where the summary and per-document JSON are written",
    )
    parser.add_argument(
        "--hashes_file",
        type=str,
        default=str(yaml_config.app.hash_store),
        help="JSON list of known content hashes (read and updated)",
    )
    parser.add_argument(
        "--no_progress", action="store_true", help="Disable the progress bar"
    )
    args = parser.parse_args()

    input_dir = Path(args.input_dir)
    if not input_dir.exists():
        log.error("Input directory does not exist: %s", input_dir)
        raise SystemExit(1)

    results = ingest_folder(
        input_dir=input_dir,
        output_dir=Path(args.output_dir),
        hash_store=Path(args.hashes_file),
        show_progress=not args.no_progress,
    )
    analysis = analyze_results(results)
    log.info(
        "Processed %d file(s): %d ok, %d failed, %d duplicate(s); categories=%s",
        results.total_processed,
        len(results.successful),
        len(results.failed),
        len(results.duplicates),
        analysis["categories"],
    )


if __name__ == "__main__":
    main()
