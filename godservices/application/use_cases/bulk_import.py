"""Bulk creation of booking documents from exported job records."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """Outcome of an import run."""

    imported: int = 0
    failed: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.imported + self.failed


def import_jobs(
    records: Iterable[Mapping[str, Any]],
    create: Callable[[Mapping[str, Any]], Any],
) -> ImportSummary:
    """Call ``create`` for every record, carrying on after individual failures."""

    summary = ImportSummary()
    for record in records:
        label = str(record.get("serviceType", "<unknown>"))
        try:
            create(record)
        except Exception as exc:
            summary.failed += 1
            summary.errors.append((label, str(exc)))
            logger.error("❌ Failed: %s %s", label, exc)
        else:
            summary.imported += 1
            logger.info("✅ Added: %s", label)

    logger.info(
        "🎉 Import complete! %s added, %s failed", summary.imported, summary.failed
    )
    return summary


__all__ = ["ImportSummary", "import_jobs"]
