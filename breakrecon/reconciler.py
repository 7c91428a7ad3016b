from __future__ import annotations

import logging
from collections import Counter
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from .gaps import detect_gaps, entries_by_employee, first_gap_by_employee
from .matcher import match_names
from .models import (
    BreakSheetEntry,
    ComparisonOutcome,
    DiffStatus,
    DiscrepancyReport,
    EmployeeComparisonResult,
    ReportSummary,
    TimecardEntry,
    TimecardGap,
)

logger = logging.getLogger(__name__)


def classify(
    gap: Optional[TimecardGap],
    break_entry: Optional[BreakSheetEntry],
    tolerance: int = 5,
) -> ComparisonOutcome:
    if gap is not None and break_entry is not None:
        gap_minutes = gap.gap_minutes
        logged = break_entry.logged_minutes
        if logged is None:
            return ComparisonOutcome(
                status=DiffStatus.WARNING,
                discrepancy_minutes=None,
                message=(
                    f"Gap detected ({gap_minutes}min) but break duration "
                    "not specified in sheet"
                ),
            )
        difference = abs(gap_minutes - logged)
        if difference <= tolerance:
            return ComparisonOutcome(
                status=DiffStatus.MATCH,
                discrepancy_minutes=0,
                message=f"Break properly logged (Gap: {gap_minutes}min, Logged: {logged}min)",
            )
        return ComparisonOutcome(
            status=DiffStatus.MISMATCH,
            discrepancy_minutes=gap_minutes - logged,
            message=(
                f"Duration mismatch (Gap: {gap_minutes}min, Logged: {logged}min, "
                f"Difference: {difference}min)"
            ),
        )

    if gap is not None:
        return ComparisonOutcome(
            status=DiffStatus.DELETION,
            discrepancy_minutes=gap.gap_minutes,
            message=f"Gap detected ({gap.gap_minutes}min) but no break logged in sheet",
        )

    if break_entry is not None:
        logged = break_entry.logged_minutes
        if logged is None:
            return ComparisonOutcome(
                status=DiffStatus.WARNING,
                discrepancy_minutes=None,
                message="Break logged (duration unspecified) but no gap found in timecard",
            )
        return ComparisonOutcome(
            status=DiffStatus.WARNING,
            discrepancy_minutes=-logged,
            message=f"Break logged ({logged}min) but no gap found in timecard",
        )

    return ComparisonOutcome(
        status=DiffStatus.MATCH,
        discrepancy_minutes=None,
        message="No break required",
    )


def summarize(results: Sequence[EmployeeComparisonResult]) -> ReportSummary:
    counts = Counter(result.status for result in results)
    return ReportSummary(
        total_employees=len(results),
        matches=counts[DiffStatus.MATCH],
        mismatches=counts[DiffStatus.MISMATCH],
        missing_break_log=counts[DiffStatus.DELETION],
        missing_gap=counts[DiffStatus.WARNING],
        no_break_required=counts[DiffStatus.ADDITION],
    )


def reconcile(
    timecard_entries: Iterable[TimecardEntry],
    break_sheet_entries: Sequence[BreakSheetEntry],
    target_date: date,
    tolerance: int = 5,
    match_threshold: int = 80,
    min_gap_minutes: int = 10,
) -> DiscrepancyReport:
    timecard_entries = list(timecard_entries)
    gaps = first_gap_by_employee(
        detect_gaps(timecard_entries, target_date, min_gap_minutes=min_gap_minutes)
    )
    employees = entries_by_employee(timecard_entries, target_date)

    sheet_names = [entry.worker_name for entry in break_sheet_entries]
    name_matches = match_names(
        (entries[0].employee_name for entries in employees.values()),
        sheet_names,
        threshold=match_threshold,
    )

    results: List[EmployeeComparisonResult] = []
    for employee_id, entries in employees.items():
        employee_name = entries[0].employee_name
        name_match = name_matches[employee_name]
        break_entry = _find_break_entry(break_sheet_entries, name_match.match)
        gap = gaps.get(employee_id)
        outcome = classify(gap, break_entry, tolerance=tolerance)

        results.append(
            EmployeeComparisonResult(
                employee_name=employee_name,
                employee_id=employee_id,
                matched_break_sheet_name=name_match.match,
                match_score=name_match.score,
                gap=gap,
                total_shift_hours=sum(entry.shift_hours for entry in entries),
                break_duration_minutes=break_entry.declared_minutes if break_entry else None,
                break_time_range=break_entry.time_range if break_entry else None,
                status=outcome.status,
                discrepancy_minutes=outcome.discrepancy_minutes,
                message=outcome.message,
            )
        )

    summary = summarize(results)
    logger.info(
        "Reconciled %s: %d employees, %d match, %d mismatch, %d missing log, %d missing gap",
        target_date.isoformat(),
        summary.total_employees,
        summary.matches,
        summary.mismatches,
        summary.missing_break_log,
        summary.missing_gap,
    )
    return DiscrepancyReport(
        target_date=target_date,
        generated_at=datetime.now(),
        summary=summary,
        results=tuple(results),
    )


def _find_break_entry(
    entries: Sequence[BreakSheetEntry], worker_name: Optional[str]
) -> Optional[BreakSheetEntry]:
    if worker_name is None:
        return None
    for entry in entries:
        if entry.worker_name == worker_name:
            return entry
    return None
