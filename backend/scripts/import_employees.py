#!/usr/bin/env python3
"""Bulk-import employees from a JSON array into the directory's data file.

Run from the backend/ directory:

    python3 scripts/import_employees.py employees.json [--data-path PATH] [--dry-run] [--verbose]

Each entry goes through the same normalization and id allocation as
POST /employees, so ids continue after the highest existing one.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from employee_directory.core.config import Settings  # noqa: E402
from employee_directory.core.exceptions import StoreIOError  # noqa: E402
from employee_directory.models.employee import normalize_create_payload  # noqa: E402
from employee_directory.services.employee_store import EmployeeStore  # noqa: E402

logger = logging.getLogger(__name__)


def load_source(path: Path) -> list[dict[str, Any]]:
    """Read the import file; it must hold a JSON array of objects."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of employees")
    rejected = [index for index, item in enumerate(data) if not isinstance(item, dict)]
    if rejected:
        raise ValueError(f"{path} has non-object entries at positions {rejected}")
    return data


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import employees from a JSON array into the directory data file",
    )
    parser.add_argument(
        "source",
        type=Path,
        help="JSON file holding an array of employee objects",
    )
    parser.add_argument(
        "--data-path",
        type=Path,
        default=None,
        help="Target data file (default: DATA_PATH setting)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Normalize and log entries without writing the data file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


async def import_employees(args: argparse.Namespace) -> tuple[int, int]:
    """Import every entry; returns (succeeded, failed)."""
    settings = Settings()
    data_path = args.data_path or Path(settings.DATA_PATH)
    entries = load_source(args.source)
    logger.info("Found %d employees in %s", len(entries), args.source)

    store = EmployeeStore(data_path, lock_timeout=settings.STORE_LOCK_TIMEOUT)
    succeeded = 0
    failed = 0

    for index, entry in enumerate(entries, start=1):
        if args.dry_run:
            fields = normalize_create_payload(entry)
            logger.info("[DRY RUN] %d/%d: %s", index, len(entries), fields["fullName"] or "<no name>")
            succeeded += 1
            continue

        try:
            employee = await store.create_employee(entry)
        except StoreIOError:
            logger.exception("Entry %d/%d failed", index, len(entries))
            failed += 1
            continue

        logger.debug("Imported %s as id %d", employee.full_name, employee.id)
        succeeded += 1

    logger.info("=" * 50)
    logger.info("Import complete!")
    logger.info("Total succeeded: %d", succeeded)
    logger.info("Total failed: %d", failed)
    if args.dry_run:
        logger.info("[DRY RUN] %s was not modified.", data_path)
    return succeeded, failed


def main() -> None:
    args = parse_args()
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")
    _, failed = asyncio.run(import_employees(args))
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
