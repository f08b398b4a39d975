from __future__ import annotations

import json
from datetime import date, datetime

import pytest

from src.class_attendance.class_attendance.attendance.service import AttendanceMarker
from src.class_attendance.class_attendance.core.enums import AttendanceState, ScanResult
from src.class_attendance.class_attendance.core.exceptions import StoreUnavailableError
from src.class_attendance.class_attendance.records.memory_store import InMemoryRecordStore
from src.class_attendance.class_attendance.students.model import Student

TODAY = date(2024, 1, 1)
TODAY_KEY = "Mon Jan 01 2024"

STUDENT = Student(
    student_id="S1",
    name="John A. Doe",
    first_name="John",
    last_name="Doe",
    middle_initial="A",
    email="john.doe@example.com",
)


def token(session_date: str = TODAY_KEY) -> str:
    return json.dumps({"kind": "attendance", "sessionDate": session_date, "sessionId": "s1", "issuedAtMillis": 1})


class UnavailableStore(InMemoryRecordStore):
    def insert_if_absent(self, date_key, record):
        raise StoreUnavailableError("disk full")


class CountingStore(InMemoryRecordStore):
    def __init__(self):
        super().__init__()
        self.reads = 0

    def records_for(self, date_key):
        self.reads += 1
        return super().records_for(date_key)


def test_first_scan_is_accepted_and_stored():
    store = InMemoryRecordStore()
    marker = AttendanceMarker(store)

    outcome = marker.submit_scan(token(), STUDENT, TODAY, now=datetime(2024, 1, 1, 9, 15, 0))

    assert outcome.result == ScanResult.ACCEPTED
    assert outcome.accepted
    assert outcome.state == AttendanceState.MARKED
    assert outcome.marked_at == "01/01/2024, 09:15:00 AM"
    assert list(store.records_for(TODAY_KEY)) == [outcome.record]


def test_record_snapshots_student_identity():
    store = InMemoryRecordStore()

    outcome = AttendanceMarker(store).submit_scan(token(), STUDENT, TODAY, now=datetime(2024, 1, 1, 9, 0, 0))

    rec = outcome.record
    assert rec.student_id == "S1"
    assert rec.student_name == "John A. Doe"
    assert (rec.first_name, rec.middle_initial, rec.last_name) == ("John", "A", "Doe")
    assert rec.email == "john.doe@example.com"
    assert rec.date == TODAY_KEY


def test_missing_optional_identity_fields_become_empty_strings():
    outcome = AttendanceMarker(InMemoryRecordStore()).submit_scan(token(), Student("S9", "Nine"), TODAY)

    assert outcome.record.first_name == ""
    assert outcome.record.email == ""


def test_second_scan_same_day_reports_already_marked_with_original_time():
    store = InMemoryRecordStore()
    marker = AttendanceMarker(store)
    marker.submit_scan(token(), STUDENT, TODAY, now=datetime(2024, 1, 1, 9, 0, 0))

    again = marker.submit_scan(token(), STUDENT, TODAY, now=datetime(2024, 1, 1, 11, 30, 0))
    third = marker.submit_scan(token(), STUDENT, TODAY, now=datetime(2024, 1, 1, 12, 0, 0))

    assert again.result == ScanResult.ALREADY_MARKED
    assert third.result == ScanResult.ALREADY_MARKED
    assert again.marked_at == "01/01/2024, 09:00:00 AM"
    assert again.state == AttendanceState.MARKED
    assert [r.student_id for r in store.records_for(TODAY_KEY)] == ["S1"]


def test_other_students_can_mark_the_same_day():
    store = InMemoryRecordStore()
    marker = AttendanceMarker(store)

    marker.submit_scan(token(), STUDENT, TODAY)
    outcome = marker.submit_scan(token(), Student("S2", "Jane Roe"), TODAY)

    assert outcome.result == ScanResult.ACCEPTED
    assert len(store.records_for(TODAY_KEY)) == 2


def test_token_for_another_day_is_wrong_date():
    store = InMemoryRecordStore()

    outcome = AttendanceMarker(store).submit_scan(token("Tue Jan 02 2024"), STUDENT, TODAY)

    assert outcome.result == ScanResult.WRONG_DATE
    assert outcome.state == AttendanceState.ERROR
    assert outcome.record is None
    assert list(store.records_for(TODAY_KEY)) == []
    assert list(store.records_for("Tue Jan 02 2024")) == []


def test_stale_token_on_marked_day_reports_wrong_date_not_already_marked():
    marker = AttendanceMarker(InMemoryRecordStore())
    marker.submit_scan(token(), STUDENT, TODAY)

    outcome = marker.submit_scan(token("Sun Dec 31 2023"), STUDENT, TODAY)

    assert outcome.result == ScanResult.WRONG_DATE


@pytest.mark.parametrize("raw", ["not json", "{}", '{"kind": "attendance"}', '{"sessionDate": "Mon Jan 01 2024"}'])
def test_malformed_scan_is_rejected_before_touching_the_store(raw):
    store = CountingStore()

    outcome = AttendanceMarker(store).submit_scan(raw, STUDENT, TODAY)

    assert outcome.result == ScanResult.MALFORMED_TOKEN
    assert outcome.state == AttendanceState.ERROR
    assert store.reads == 0


def test_malformed_scan_does_not_change_marked_status():
    marker = AttendanceMarker(InMemoryRecordStore())
    marker.submit_scan(token(), STUDENT, TODAY)

    marker.submit_scan("garbage", STUDENT, TODAY)

    assert marker.current_status(STUDENT, TODAY).state == AttendanceState.MARKED


def test_legacy_scanner_payload_is_accepted():
    raw = json.dumps({"type": "attendance", "date": TODAY_KEY, "sessionId": "session-1", "timestamp": 1})

    outcome = AttendanceMarker(InMemoryRecordStore()).submit_scan(raw, STUDENT, TODAY)

    assert outcome.result == ScanResult.ACCEPTED


def test_current_status_before_and_after_marking():
    marker = AttendanceMarker(InMemoryRecordStore())

    before = marker.current_status(STUDENT, TODAY)
    marker.submit_scan(token(), STUDENT, TODAY, now=datetime(2024, 1, 1, 8, 5, 0))
    after = marker.current_status(STUDENT, TODAY)

    assert before.state == AttendanceState.NOT_MARKED
    assert before.marked_at is None
    assert after.state == AttendanceState.MARKED
    assert after.marked_at == "01/01/2024, 08:05:00 AM"


def test_status_is_scoped_to_the_day():
    marker = AttendanceMarker(InMemoryRecordStore())
    marker.submit_scan(token(), STUDENT, TODAY)

    assert marker.current_status(STUDENT, date(2024, 1, 2)).state == AttendanceState.NOT_MARKED


def test_store_failure_is_surfaced_as_its_own_outcome():
    outcome = AttendanceMarker(UnavailableStore()).submit_scan(token(), STUDENT, TODAY)

    assert outcome.result == ScanResult.STORE_UNAVAILABLE
    assert outcome.state == AttendanceState.ERROR
    assert not outcome.accepted


def test_outcome_serializes_for_the_shell():
    outcome = AttendanceMarker(InMemoryRecordStore()).submit_scan(
        token(), STUDENT, TODAY, now=datetime(2024, 1, 1, 9, 0, 0)
    )

    data = outcome.to_dict()

    assert data["result"] == "ACCEPTED"
    assert data["state"] == "MARKED"
    assert data["markedAt"] == "01/01/2024, 09:00:00 AM"
    assert data["record"]["studentId"] == "S1"
