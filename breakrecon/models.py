from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple


class DiffStatus(str, Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    ADDITION = "addition"
    DELETION = "deletion"
    WARNING = "warning"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    DiffStatus.MATCH: "Match",
    DiffStatus.MISMATCH: "Mismatch",
    DiffStatus.ADDITION: "Added",
    DiffStatus.DELETION: "Removed",
    DiffStatus.WARNING: "Warning",
}


@dataclass(frozen=True)
class TimecardEntry:
    employee_name: str
    employee_id: str
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    shift_hours: float


@dataclass(frozen=True)
class TimeRange:
    start: Optional[datetime]
    end: Optional[datetime]
    actual_minutes: Optional[int]


@dataclass(frozen=True)
class BreakSheetEntry:
    worker_name: str
    declared_minutes: Optional[int]
    time_range: Optional[TimeRange]
    has_remarks: bool

    @property
    def logged_minutes(self) -> Optional[int]:
        """Minutes the sheet says were taken: the range annotation wins over the declared text."""
        if self.time_range is not None and self.time_range.actual_minutes is not None:
            return self.time_range.actual_minutes
        return self.declared_minutes


@dataclass(frozen=True)
class TimecardGap:
    employee_id: str
    employee_name: str
    gap_start: datetime
    gap_end: datetime
    gap_minutes: int


@dataclass(frozen=True)
class NameMatchResult:
    match: Optional[str]
    score: int


@dataclass(frozen=True)
class ComparisonOutcome:
    status: DiffStatus
    discrepancy_minutes: Optional[int]
    message: str


@dataclass(frozen=True)
class EmployeeComparisonResult:
    employee_name: str
    employee_id: str
    matched_break_sheet_name: Optional[str]
    match_score: int
    gap: Optional[TimecardGap]
    total_shift_hours: float
    break_duration_minutes: Optional[int]
    break_time_range: Optional[TimeRange]
    status: DiffStatus
    discrepancy_minutes: Optional[int]
    message: str


@dataclass(frozen=True)
class ReportSummary:
    total_employees: int
    matches: int
    mismatches: int
    missing_break_log: int
    missing_gap: int
    no_break_required: int


@dataclass(frozen=True)
class DiscrepancyReport:
    target_date: date
    generated_at: datetime
    summary: ReportSummary
    results: Tuple[EmployeeComparisonResult, ...]
