from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List

from .models import TimecardEntry, TimecardGap
from .utils import minutes_between


def entries_by_employee(
    entries: Iterable[TimecardEntry], target_date: date
) -> Dict[str, List[TimecardEntry]]:
    grouped: Dict[str, List[TimecardEntry]] = {}
    for entry in entries:
        if entry.work_date != target_date:
            continue
        grouped.setdefault(entry.employee_id, []).append(entry)
    return grouped


def detect_gaps(
    entries: Iterable[TimecardEntry],
    target_date: date,
    min_gap_minutes: int = 10,
) -> List[TimecardGap]:
    gaps: List[TimecardGap] = []
    for employee_id, employee_entries in entries_by_employee(entries, target_date).items():
        punched = sorted(
            (entry for entry in employee_entries if entry.clock_in is not None),
            key=lambda entry: entry.clock_in,
        )
        for current, following in zip(punched, punched[1:]):
            if current.clock_out is None:
                continue
            gap_minutes = minutes_between(current.clock_out, following.clock_in)
            if gap_minutes > min_gap_minutes:
                gaps.append(
                    TimecardGap(
                        employee_id=employee_id,
                        employee_name=current.employee_name,
                        gap_start=current.clock_out,
                        gap_end=following.clock_in,
                        gap_minutes=gap_minutes,
                    )
                )
    return gaps


def first_gap_by_employee(gaps: Iterable[TimecardGap]) -> Dict[str, TimecardGap]:
    # TODO: decide between summing or flagging employees with several qualifying gaps.
    first: Dict[str, TimecardGap] = {}
    for gap in gaps:
        first.setdefault(gap.employee_id, gap)
    return first
