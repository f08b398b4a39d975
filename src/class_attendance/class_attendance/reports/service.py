from __future__ import annotations

import csv
import io
import logging
from datetime import date, datetime, timedelta

from ..common.datetime_utils import date_key, parse_date_key, parse_marked_at
from ..common.validators import require_non_negative_int
from ..core.constants import GOOD_ATTENDANCE_PERCENT, RECENT_RECORDS_LIMIT, WARNING_ATTENDANCE_PERCENT
from ..core.enums import ReportStatus
from ..records.model import AttendanceRecord
from ..records.repository import RecordStore, find_student_record
from ..students.model import Student
from .model import Report

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "date",
    "studentId",
    "studentName",
    "firstName",
    "middleInitial",
    "lastName",
    "email",
    "markedAt",
]


def attendance_percentage(present_days: int, total_days: int) -> int:
    """Whole percent, halves rounded up. 0 when there were no class days."""
    if total_days <= 0:
        return 0
    return (200 * present_days + total_days) // (2 * total_days)


def status_for(percentage: int) -> ReportStatus:
    if percentage >= GOOD_ATTENDANCE_PERCENT:
        return ReportStatus.GOOD
    if percentage >= WARNING_ATTENDANCE_PERCENT:
        return ReportStatus.WARNING
    return ReportStatus.POOR


def _sort_key(record: AttendanceRecord) -> datetime:
    marked = parse_marked_at(record.marked_at)
    if marked:
        return marked
    try:
        return datetime.combine(parse_date_key(record.date), datetime.min.time())
    except ValueError:
        return datetime.min


class ReportAggregator:
    """Use case: attendance rate for one student over a trailing window.

    A date counts as a class day when anyone's attendance was recorded on it;
    there is no separate class schedule.
    """

    def __init__(self, store: RecordStore, *, recent_limit: int = RECENT_RECORDS_LIMIT):
        self._store = store
        self._recent_limit = int(recent_limit)

    def build_report(self, student: Student, window_days: int, as_of: date) -> Report:
        window_days = require_non_negative_int(window_days, "Window days")

        class_days = 0
        matched: list[AttendanceRecord] = []

        day = as_of - timedelta(days=window_days)
        while day <= as_of:
            records = self._store.records_for(date_key(day))
            if records:
                class_days += 1
                # One present day per date, even if the store holds duplicates.
                own = find_student_record(records, student.student_id)
                if own is not None:
                    matched.append(own)
            day += timedelta(days=1)

        present_days = len(matched)
        total_days = max(class_days, present_days)
        percentage = attendance_percentage(present_days, total_days)

        matched.sort(key=_sort_key, reverse=True)
        logger.debug(
            "Report for %s as of %s: %d/%d days", student.student_id, as_of, present_days, total_days
        )
        return Report(
            student_id=student.student_id,
            window_days=window_days,
            as_of=as_of,
            total_days=total_days,
            present_days=present_days,
            percentage=percentage,
            status=status_for(percentage),
            records=matched,
            recent_records=matched[: self._recent_limit],
        )


def export_csv(report: Report) -> str:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
    writer.writeheader()
    for r in report.records:
        writer.writerow(r.to_dict())
    return out.getvalue()
