from __future__ import annotations

import argparse
import logging
import sys

from breakrecon.config import ReconcileSettings
from breakrecon.runner import run_reconciliation
from breakrecon.utils import parse_csv_date


def main() -> None:
    defaults = ReconcileSettings()
    parser = argparse.ArgumentParser(
        description="Reconcile timecard clock gaps against a manual break sheet."
    )
    parser.add_argument("--timecard", required=True, help="Path to the time & attendance CSV.")
    parser.add_argument("--break-sheet", required=True, help="Path to the break sheet CSV.")
    parser.add_argument(
        "--date",
        help="Work date to reconcile (MM/DD/YYYY). Defaults to the only date in the timecard.",
    )
    parser.add_argument(
        "--tolerance",
        type=int,
        default=defaults.tolerance_minutes,
        help="Minutes a gap may differ from the logged break and still match.",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=defaults.match_threshold,
        help="Minimum name similarity score (0-100) to pair a break sheet row.",
    )
    parser.add_argument(
        "--min-gap",
        type=int,
        default=defaults.min_gap_minutes,
        help="Clock gaps of this many minutes or fewer are ignored.",
    )
    parser.add_argument(
        "--out-dir",
        default="outputs",
        help="Directory for the discrepancy report CSV.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped rows.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = ReconcileSettings(
        tolerance_minutes=args.tolerance,
        match_threshold=args.threshold,
        min_gap_minutes=args.min_gap,
    )
    try:
        target_date = parse_csv_date(args.date) if args.date else None
        report_path, report = run_reconciliation(
            args.timecard,
            args.break_sheet,
            args.out_dir,
            target_date=target_date,
            settings=settings,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    summary = report.summary
    print(f"Date: {report.target_date.strftime('%m/%d/%Y')}")
    print(f"Employees: {summary.total_employees}")
    print(f"Matches: {summary.matches}")
    print(f"Mismatches: {summary.mismatches}")
    print(f"Missing Logs: {summary.missing_break_log}")
    print(f"Missing Gaps: {summary.missing_gap}")
    print(f"Report: {report_path}")


if __name__ == "__main__":
    main()
