"""Core orchestration utilities for the status audit."""
from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Union

from .clients import StatusFetcherProvider
from .errors import StatusFetchError
from .report import Report
from .results import SpecResult
from .specs import Spec

logger = logging.getLogger(__name__)

CheckOutcome = Union[SpecResult, Exception]


def check_spec(spec: Spec, fetchers: StatusFetcherProvider) -> CheckOutcome:
    """Run one check, returning any failure instead of raising it.

    No exception raised while checking a single spec may stop the others; it
    is handed back so the spec gets an Error record.
    """

    try:
        return spec.check(fetchers)
    except StatusFetchError as exc:
        logger.warning("check failed for %s: %s", spec.resource_path(), exc)
        return exc
    except Exception as exc:
        logger.exception("unexpected error while checking %s", spec.resource_path())
        return exc


def run_specs(
    specs: Iterable[Spec],
    fetchers: StatusFetcherProvider,
    *,
    max_workers: int = 1,
) -> Report:
    """Check every spec and return a report in input order.

    With ``max_workers > 1`` checks run on a thread pool; outcomes are
    buffered by position and only the calling thread writes to the report.
    """

    specs = list(specs)
    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")

    if max_workers == 1 or len(specs) <= 1:
        outcomes: List[CheckOutcome] = [check_spec(spec, fetchers) for spec in specs]
    else:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(specs))) as executor:
            outcomes = list(executor.map(lambda spec: check_spec(spec, fetchers), specs))

    report = Report()
    for spec, outcome in zip(specs, outcomes):
        if isinstance(outcome, Exception):
            report.record_error(spec, outcome)
        else:
            report.record_ok(spec, outcome)
    logger.debug("checked %d spec(s)", report.total_record_count())
    return report


def export_report_to_json(report: Report, path: str) -> str:
    """Write the report mapping to *path* as indented JSON."""

    with open(path, "w", encoding="utf-8") as fh:
        json.dump(report.to_dict(), fh, indent=2)
    return path


def export_report_to_excel(report: Report, path: str) -> str:
    """Write one row per record of *report* to an Excel workbook at *path*."""

    headers = ("Operator", "Resource", "Expected", "Code", "Description")
    rows = (
        (
            record.spec.operator,
            record.resource_name(),
            ", ".join(status.name for status in record.spec.status),
            record.spec_result.code.value,
            record.spec_result.description,
        )
        for record in report
    )
    return _export_rows_to_excel(rows, headers, path, sheet_title="Report")


def _export_rows_to_excel(
    rows: Iterable[Sequence[object]],
    headers: Sequence[str],
    path: str,
    *,
    sheet_title: str,
    max_width: Optional[int] = 60,
) -> str:
    """Write ``rows`` with ``headers`` to an Excel sheet using :mod:`openpyxl`."""

    try:
        from openpyxl import Workbook
        from openpyxl.utils import get_column_letter
    except ImportError as exc:  # pragma: no cover - dependency missing during tests
        raise RuntimeError(
            "The 'openpyxl' package is required to export the report to Excel. "
            "Install it with 'pip install openpyxl'."
        ) from exc

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title

    sheet.append(list(headers))
    column_widths = [len(header) for header in headers]

    for row in rows:
        values = list(row)
        sheet.append(values)
        for idx, value in enumerate(values):
            column_widths[idx] = max(column_widths[idx], len(str(value)))

    for idx, width in enumerate(column_widths, start=1):
        column_letter = get_column_letter(idx)
        sheet.column_dimensions[column_letter].width = (
            width + 2 if max_width is None else min(width + 2, max_width)
        )

    workbook.save(path)
    return path


__all__ = [
    "check_spec",
    "export_report_to_excel",
    "export_report_to_json",
    "run_specs",
]
