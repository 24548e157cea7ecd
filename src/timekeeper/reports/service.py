from __future__ import annotations

import csv
import io
from datetime import date
from typing import Optional

from ..attendance.model import SessionFilter
from ..attendance.service import AttendanceService
from ..common.datetime_utils import day_key, format_clock, format_hours

EXPORT_COLUMNS = ["Employee", "Department", "Date", "Clock In", "Clock Out", "Total Hours", "Status"]


class AttendanceExportService:
    """Builds the HR dashboard CSV export from a filtered session listing."""

    def __init__(self, attendance: AttendanceService):
        self._attendance = attendance

    def build_rows(self, filters: Optional[SessionFilter] = None) -> list[dict]:
        return [
            {
                "Employee": s.employee_name,
                "Department": s.department.value,
                "Date": s.date,
                "Clock In": format_clock(s.clock_in_time),
                "Clock Out": format_clock(s.clock_out_time),
                "Total Hours": format_hours(s.total_hours) or "-",
                "Status": s.status.value,
            }
            for s in self._attendance.list_sessions(filters)
        ]

    @staticmethod
    def to_csv(rows: list[dict]) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
        return out.getvalue().encode("utf-8-sig")

    @staticmethod
    def filename_for(today: date) -> str:
        return f"attendance_records_{day_key(today)}.csv"
