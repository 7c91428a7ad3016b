from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .config import ReconcileSettings
from .csv_reader import read_break_sheet, read_timecard
from .models import DiscrepancyReport, TimecardEntry
from .reconciler import reconcile
from .report import report_filename, write_report


def run_reconciliation(
    timecard_path: str | Path,
    break_sheet_path: str | Path,
    out_dir: str | Path,
    target_date: Optional[date] = None,
    settings: ReconcileSettings = ReconcileSettings(),
) -> Tuple[Path, DiscrepancyReport]:
    entries = read_timecard(timecard_path)
    day = target_date or _single_work_date(entries)
    break_entries = read_break_sheet(break_sheet_path, reference_date=day)

    report = reconcile(
        entries,
        break_entries,
        day,
        tolerance=settings.tolerance_minutes,
        match_threshold=settings.match_threshold,
        min_gap_minutes=settings.min_gap_minutes,
    )

    report_path = Path(out_dir) / report_filename(day)
    write_report(report_path, report)
    return report_path, report


def _single_work_date(entries: Iterable[TimecardEntry]) -> date:
    work_dates = sorted({entry.work_date for entry in entries})
    if not work_dates:
        raise ValueError("Timecard has no usable rows.")
    if len(work_dates) > 1:
        listed = ", ".join(day.strftime("%m/%d/%Y") for day in work_dates)
        raise ValueError(f"Timecard covers several dates ({listed}); pass a target date.")
    return work_dates[0]
