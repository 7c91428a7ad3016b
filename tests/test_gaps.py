import unittest
from datetime import date, datetime

from breakrecon.gaps import detect_gaps, entries_by_employee, first_gap_by_employee
from breakrecon.models import TimecardEntry

DAY = date(2025, 12, 24)


def _at(hour: int, minute: int, day: date = DAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


def _entry(employee_id, clock_in, clock_out, name="Acosta, Geovanny", day=DAY, hours=4.0):
    return TimecardEntry(
        employee_name=name,
        employee_id=employee_id,
        work_date=day,
        clock_in=clock_in,
        clock_out=clock_out,
        shift_hours=hours,
    )


class DetectGapsTests(unittest.TestCase):
    def test_gap_between_punch_pairs(self) -> None:
        entries = [
            _entry("1001", _at(9, 0), _at(12, 45)),
            _entry("1001", _at(13, 13), _at(17, 0)),
        ]
        gaps = detect_gaps(entries, DAY)
        self.assertEqual(len(gaps), 1)
        gap = gaps[0]
        self.assertEqual(gap.employee_id, "1001")
        self.assertEqual(gap.employee_name, "Acosta, Geovanny")
        self.assertEqual(gap.gap_start, _at(12, 45))
        self.assertEqual(gap.gap_end, _at(13, 13))
        self.assertEqual(gap.gap_minutes, 28)

    def test_ten_minute_floor_is_exclusive(self) -> None:
        ten = [_entry("1", _at(9, 0), _at(12, 0)), _entry("1", _at(12, 10), _at(17, 0))]
        eleven = [_entry("2", _at(9, 0), _at(12, 0)), _entry("2", _at(12, 11), _at(17, 0))]
        self.assertEqual(detect_gaps(ten, DAY), [])
        self.assertEqual([gap.gap_minutes for gap in detect_gaps(eleven, DAY)], [11])

    def test_floor_is_a_parameter(self) -> None:
        entries = [_entry("1", _at(9, 0), _at(12, 0)), _entry("1", _at(12, 10), _at(17, 0))]
        self.assertEqual(len(detect_gaps(entries, DAY, min_gap_minutes=5)), 1)

    def test_entries_sorted_by_clock_in(self) -> None:
        entries = [
            _entry("1001", _at(13, 30), _at(17, 0)),
            _entry("1001", _at(9, 0), _at(13, 0)),
        ]
        gaps = detect_gaps(entries, DAY)
        self.assertEqual([gap.gap_minutes for gap in gaps], [30])

    def test_missing_punches(self) -> None:
        entries = [
            _entry("1001", _at(9, 0), None),
            _entry("1001", _at(13, 0), _at(14, 0)),
            _entry("1001", None, _at(15, 0)),
            _entry("1001", _at(14, 30), _at(17, 0)),
        ]
        gaps = detect_gaps(entries, DAY)
        self.assertEqual([(gap.gap_start, gap.gap_minutes) for gap in gaps], [(_at(14, 0), 30)])

    def test_other_dates_and_employees_are_separate(self) -> None:
        other_day = date(2025, 12, 23)
        entries = [
            _entry("1001", _at(9, 0), _at(12, 0)),
            _entry("2002", _at(12, 30), _at(17, 0), name="Lopez, Maria"),
            _entry("1001", _at(13, 0, other_day), _at(17, 0, other_day), day=other_day),
        ]
        self.assertEqual(detect_gaps(entries, DAY), [])

    def test_multiple_gaps_first_one_kept(self) -> None:
        entries = [
            _entry("1001", _at(8, 0), _at(10, 0)),
            _entry("1001", _at(10, 15), _at(12, 0)),
            _entry("1001", _at(12, 30), _at(17, 0)),
        ]
        gaps = detect_gaps(entries, DAY)
        self.assertEqual([gap.gap_minutes for gap in gaps], [15, 30])
        self.assertEqual(first_gap_by_employee(gaps)["1001"].gap_minutes, 15)


class EntriesByEmployeeTests(unittest.TestCase):
    def test_groups_target_date_in_first_seen_order(self) -> None:
        other_day = date(2025, 12, 23)
        entries = [
            _entry("2002", _at(9, 0), _at(17, 0)),
            _entry("1001", _at(9, 0), _at(12, 0)),
            _entry("3003", _at(9, 0, other_day), _at(17, 0, other_day), day=other_day),
            _entry("2002", _at(18, 0), _at(19, 0)),
        ]
        grouped = entries_by_employee(entries, DAY)
        self.assertEqual(list(grouped), ["2002", "1001"])
        self.assertEqual(len(grouped["2002"]), 2)


if __name__ == "__main__":
    unittest.main()
