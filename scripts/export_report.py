#!/usr/bin/env python3
"""
Export the employees-by-organization report to a file.

Connects to the database given by --database-url (or DATABASE_URL), runs the
unfiltered employee-count aggregation and writes a spreadsheet or PDF.

Usage:
    python3 scripts/export_report.py --format xlsx
    python3 scripts/export_report.py --format pdf --output-dir /tmp/reports
    python3 scripts/export_report.py --dashboard --organization 3
"""

import argparse
import os
import sys
from pathlib import Path

DEFAULT_DB_URL = "sqlite:///hr_reports_demo.db"


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render the employees-by-organization report or print the dashboard.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--database-url",
        default=os.environ.get("DATABASE_URL", DEFAULT_DB_URL),
        help="SQLAlchemy database URL (default: $DATABASE_URL or local SQLite demo file).",
    )
    parser.add_argument(
        "--format",
        default="xlsx",
        help="Export format: xlsx or pdf (default: xlsx).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the exported file (default: current directory).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML reporting config.",
    )
    parser.add_argument(
        "--dashboard",
        action="store_true",
        help="Print the dashboard summaries instead of writing a file.",
    )
    parser.add_argument(
        "--organization",
        default=None,
        help="Organization id filter for --dashboard.",
    )
    return parser.parse_args(argv)


def _print_dashboard(report) -> None:
    W = 72
    print("=" * W)
    print("  BENEFITS DASHBOARD".center(W))
    print(f"  generated {report.generated_at}".center(W))
    print("=" * W)

    print(f"  {'Org':>6}  {'Organization':<40} {'Employees':>10} {'Premium':>10}")
    print("  " + "-" * (W - 2))
    premiums = {row.organization_id: row for row in report.premium_totals}
    for row in report.employee_counts:
        premium = premiums[row.organization_id].total_premium_collected
        print(
            f"  {row.organization_id:>6}  {row.organization_name[:40]:<40} "
            f"{row.employee_count:>10} {premium:>10}"
        )
    print("  " + "-" * (W - 2))
    print(
        f"  {'':>6}  {'TOTAL':<40} {report.total_employees:>10} "
        f"{report.total_premium_collected:>10}"
    )
    print()

    print(f"  {'Enrollment':>10}  {'Claims':>8}  {'Approved':>12}")
    print("  " + "-" * 34)
    for row in report.claim_summaries:
        print(
            f"  {row.enrollment_id:>10}  {row.total_claims:>8}  "
            f"{row.total_approved_amount:>12}"
        )
    print()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    from hr_kernel.db.engine import get_session_factory, init_engine_from_url
    from hr_kernel.exceptions import HRKernelError
    from hr_modules.reporting.config import ReportingConfig
    from hr_modules.reporting.service import ReportingService

    config = (
        ReportingConfig.from_yaml(args.config)
        if args.config is not None
        else ReportingConfig.with_defaults()
    )

    init_engine_from_url(args.database_url)
    service = ReportingService(session_factory=get_session_factory(), config=config)

    try:
        if args.dashboard:
            _print_dashboard(service.dashboard(organization_id=args.organization))
            return 0

        result = service.export(args.format)
    except HRKernelError as exc:
        print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 1

    args.output_dir.mkdir(parents=True, exist_ok=True)
    target = args.output_dir / result.filename
    target.write_bytes(result.content)
    print(f"  Wrote {result.row_count} rows to {target} ({result.content_type})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
