"""Utility script to import demo job records into the bookings collection."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from godservices.application.use_cases.bulk_import import import_jobs
from godservices.config import get_settings
from godservices.infrastructure.appwrite import create_gateway


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the import."""

    parser = argparse.ArgumentParser(
        description="Create one booking document per record of a JSON export.",
    )
    parser.add_argument(
        "--file",
        default="./demo-jobs-worker-a1.json",
        help="JSON file holding an array of job records (default: ./demo-jobs-worker-a1.json)",
    )
    parser.add_argument(
        "--collection",
        default=None,
        help="Target collection id (default: the configured bookings collection)",
    )
    return parser.parse_args()


def load_records(path: Path) -> list[dict]:
    """Read the job records stored in ``path``."""

    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SystemExit(f"Could not read {path}: {exc}") from exc
    except ValueError as exc:
        raise SystemExit(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise SystemExit(f"{path} must contain a JSON array of objects")
    return records


def main() -> None:
    """Import every record of the given file, reporting failures per record."""

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = parse_args()

    settings = get_settings()
    if not settings.appwrite_api_key:
        raise SystemExit("APPWRITE_API_KEY must be set to import documents.")

    records = load_records(Path(args.file))
    gateway = create_gateway(settings, api_key=settings.appwrite_api_key)
    collection_id = args.collection or settings.collection_bookings

    summary = import_jobs(
        records, lambda record: gateway.create_document(collection_id, record)
    )
    if summary.failed and not summary.imported:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
