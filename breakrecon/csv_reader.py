from __future__ import annotations

import csv
import io
import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .errors import SourceFormatError
from .models import BreakSheetEntry, TimecardEntry
from .utils import parse_csv_date, parse_duration, parse_hours, parse_time, parse_time_range

logger = logging.getLogger(__name__)

CsvContent = Union[str, bytes]

TIMECARD_COLUMNS: Dict[str, Sequence[str]] = {
    "name": ("payroll name", "employee name", "name"),
    "employee_id": ("file number", "file #", "employee id", "employee number"),
    "date": ("pay date", "date", "work date"),
    "time_in": ("time in", "in"),
    "time_out": ("time out", "out"),
    "hours": ("hours", "total hours"),
}

BREAK_SHEET_SKIP_ROWS = 2
COL_WORKER = 0
COL_DURATION = 1
COL_REMARKS = 3
COL_TIME_RANGE = 5


def read_timecard(csv_path: str | Path) -> List[TimecardEntry]:
    path = Path(csv_path)
    return parse_timecard(path.read_bytes(), source=path.name)


def read_break_sheet(
    csv_path: str | Path, reference_date: Optional[date] = None
) -> List[BreakSheetEntry]:
    path = Path(csv_path)
    return parse_break_sheet(
        path.read_bytes(), reference_date=reference_date, source=path.name
    )


def parse_timecard(content: CsvContent, source: str = "timecard CSV") -> List[TimecardEntry]:
    rows = _read_rows(content, source)
    if not rows:
        raise SourceFormatError(source, "CSV header row not found.")

    header = rows[0]
    columns = _resolve_columns(header, source)

    entries: List[TimecardEntry] = []
    for line_no, row in enumerate(rows[1:], start=2):
        name = _cell(row, columns["name"])
        employee_id = _cell(row, columns["employee_id"])
        date_raw = _cell(row, columns["date"])
        time_in_raw = _cell(row, columns["time_in"])
        time_out_raw = _cell(row, columns["time_out"])

        if not name or not employee_id or not date_raw:
            logger.debug("%s row %d: missing name, id or date; skipped", source, line_no)
            continue
        if not time_in_raw and not time_out_raw:
            logger.debug("%s row %d: no punches; skipped", source, line_no)
            continue
        try:
            work_date = parse_csv_date(date_raw)
        except ValueError:
            logger.debug("%s row %d: unreadable date %r; skipped", source, line_no, date_raw)
            continue

        clock_in = parse_time(time_in_raw, work_date)
        clock_out = parse_time(time_out_raw, work_date)
        if clock_in is None and clock_out is None:
            logger.debug("%s row %d: unreadable punches; skipped", source, line_no)
            continue

        entries.append(
            TimecardEntry(
                employee_name=name,
                employee_id=employee_id,
                work_date=work_date,
                clock_in=clock_in,
                clock_out=clock_out,
                shift_hours=parse_hours(_cell(row, columns["hours"])),
            )
        )

    logger.info("Read %d timecard entries from %s", len(entries), source)
    return entries


def parse_break_sheet(
    content: CsvContent,
    reference_date: Optional[date] = None,
    source: str = "break sheet CSV",
) -> List[BreakSheetEntry]:
    day = reference_date or date.today()
    rows = _read_rows(content, source)

    entries: List[BreakSheetEntry] = []
    for line_no, row in enumerate(rows[BREAK_SHEET_SKIP_ROWS:], start=BREAK_SHEET_SKIP_ROWS + 1):
        worker = _cell(row, COL_WORKER)
        if not worker:
            logger.debug("%s row %d: no worker name; skipped", source, line_no)
            continue
        entries.append(
            BreakSheetEntry(
                worker_name=worker,
                declared_minutes=parse_duration(_cell(row, COL_DURATION)),
                time_range=parse_time_range(_cell(row, COL_TIME_RANGE), day),
                has_remarks=bool(_cell(row, COL_REMARKS)),
            )
        )

    logger.info("Read %d break sheet entries from %s", len(entries), source)
    return entries


def _read_rows(content: CsvContent, source: str) -> List[List[str]]:
    if isinstance(content, bytes):
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise SourceFormatError(source, str(exc)) from exc
    else:
        text = content.lstrip("\ufeff")

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    try:
        return [row for row in reader if row]
    except csv.Error as exc:
        raise SourceFormatError(source, f"line {reader.line_num}: {exc}") from exc


def _resolve_columns(header: List[str], source: str) -> Dict[str, int]:
    normalized = [cell.strip().lower() for cell in header]
    columns: Dict[str, int] = {}
    for field, aliases in TIMECARD_COLUMNS.items():
        for alias in aliases:
            if alias in normalized:
                columns[field] = normalized.index(alias)
                break
        else:
            raise SourceFormatError(source, f"CSV missing column: {aliases[0].title()}")
    return columns


def _cell(row: List[str], idx: int) -> str:
    if idx >= len(row):
        return ""
    return row[idx].strip()
