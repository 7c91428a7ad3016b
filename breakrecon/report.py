from __future__ import annotations

import csv
from datetime import date
from pathlib import Path

from .models import DiscrepancyReport

REPORT_HEADER = ["Employee", "File Number", "Gap (min)", "Logged (min)", "Status", "Message"]


def report_filename(target_date: date) -> str:
    return f"discrepancy-report-{target_date.strftime('%m-%d-%Y')}.csv"


def write_report(path: str | Path, report: DiscrepancyReport) -> None:
    report_path = Path(path)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with report_path.open("w", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(REPORT_HEADER)
        for item in report.results:
            writer.writerow(
                [
                    item.employee_name,
                    item.employee_id,
                    item.gap.gap_minutes if item.gap else "",
                    "" if item.break_duration_minutes is None else item.break_duration_minutes,
                    item.status.value,
                    item.message,
                ]
            )
