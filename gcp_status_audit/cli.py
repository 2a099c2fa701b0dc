"""Command line interface for the GCP status audit tool."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from . import __version__
from .clients import GoogleCloudFetchers
from .config import load_settings
from .core import export_report_to_excel, export_report_to_json, run_specs
from .errors import SpecParseError
from .specs import load_specs

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Return parsed command line arguments."""

    parser = argparse.ArgumentParser(
        description="Assert that GKE and Cloud SQL resources are in their expected states."
    )
    parser.add_argument("specfile", metavar="SPEC_FILE", help="Path to the YAML spec file")
    parser.add_argument("--json", dest="json_path", help="Optional path to export the report as JSON")
    parser.add_argument(
        "--excel",
        dest="excel_path",
        help="Optional path to export the report as an Excel workbook (.xlsx)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each status request",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Number of checks to run concurrently",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (e.g. DEBUG, INFO)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point used by ``python -m gcp_status_audit``."""

    args = parse_args(argv)
    try:
        settings = load_settings(
            request_timeout=args.timeout,
            max_workers=args.max_workers,
            log_level=args.log_level,
        )
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    logger.debug("parse specfile %s", args.specfile)
    try:
        specs = load_specs(args.specfile)
    except SpecParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    logger.debug("check %d spec(s)", len(specs))
    fetchers = GoogleCloudFetchers(timeout=settings.request_timeout)
    report = run_specs(specs, fetchers, max_workers=settings.max_workers)

    logger.debug("print report")
    sys.stdout.write(report.render())
    sys.stdout.flush()

    if args.json_path:
        try:
            path = export_report_to_json(report, args.json_path)
        except OSError as exc:
            print(f"Failed to export JSON report: {exc}", file=sys.stderr)
        else:
            print(f"JSON report written to {path}", file=sys.stderr)

    if args.excel_path:
        try:
            path = export_report_to_excel(report, args.excel_path)
        except (RuntimeError, OSError) as exc:
            print(f"Failed to export Excel report: {exc}", file=sys.stderr)
        else:
            print(f"Excel report written to {path}", file=sys.stderr)

    return EXIT_SUCCESS if report.is_all_green() else EXIT_FAILURE


__all__ = ["main", "parse_args"]
