from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import date_key, format_marked_at, now_local
from ..core.enums import AttendanceState, ScanResult
from ..core.exceptions import MalformedTokenError, StoreUnavailableError
from ..records.model import AttendanceRecord
from ..records.repository import RecordStore, find_student_record
from ..students.model import Student
from ..tokens.parser import parse_token
from .model import ScanOutcome, StatusView

logger = logging.getLogger(__name__)

MSG_ACCEPTED = "Attendance marked successfully!"
MSG_ALREADY_MARKED = "You have already marked attendance for today"
MSG_WRONG_DATE = "This QR code is not valid for today"
MSG_MALFORMED = "Invalid QR code. Please scan the correct attendance QR code."
MSG_STORE_UNAVAILABLE = "Attendance could not be saved right now. Please scan again."


class AttendanceMarker:
    """Use case: mark a student present from a scanned token.

    Checks run in a fixed order: token shape, then session date, then duplicates,
    so a stale token on an already-marked day reports WRONG_DATE.
    """

    def __init__(self, store: RecordStore):
        self._store = store

    def current_status(self, student: Student, today: date) -> StatusView:
        existing = find_student_record(self._store.records_for(date_key(today)), student.student_id)
        if existing:
            return StatusView(state=AttendanceState.MARKED, marked_at=existing.marked_at, message=MSG_ALREADY_MARKED)
        return StatusView(state=AttendanceState.NOT_MARKED)

    def submit_scan(
        self,
        raw: str,
        student: Student,
        today: date,
        *,
        now: Optional[datetime] = None,
    ) -> ScanOutcome:
        try:
            token = parse_token(raw)
        except MalformedTokenError as e:
            logger.info("Rejected malformed code from %s: %s", student.student_id, e)
            return ScanOutcome(result=ScanResult.MALFORMED_TOKEN, message=MSG_MALFORMED)

        today_key = date_key(today)
        if token.session_date != today_key:
            logger.info(
                "Rejected code for %r from %s (today is %r)", token.session_date, student.student_id, today_key
            )
            return ScanOutcome(result=ScanResult.WRONG_DATE, message=MSG_WRONG_DATE)

        record = self._snapshot(student, today_key, now or now_local())
        try:
            existing = self._store.insert_if_absent(today_key, record)
        except StoreUnavailableError as e:
            logger.error("Could not record attendance for %s on %s: %s", student.student_id, today_key, e)
            return ScanOutcome(result=ScanResult.STORE_UNAVAILABLE, message=MSG_STORE_UNAVAILABLE)

        if existing:
            return ScanOutcome(result=ScanResult.ALREADY_MARKED, message=MSG_ALREADY_MARKED, record=existing)

        logger.info("Marked %s present on %s (session %s)", student.student_id, today_key, token.session_id or "-")
        return ScanOutcome(result=ScanResult.ACCEPTED, message=MSG_ACCEPTED, record=record)

    @staticmethod
    def _snapshot(student: Student, today_key: str, now: datetime) -> AttendanceRecord:
        return AttendanceRecord(
            student_id=student.student_id,
            student_name=student.name,
            first_name=student.first_name or "",
            last_name=student.last_name or "",
            middle_initial=student.middle_initial or "",
            email=student.email or "",
            marked_at=format_marked_at(now),
            date=today_key,
        )
