from __future__ import annotations

from typing import Optional, Sequence

from .model import AttendanceRecord
from .repository import RecordStore, find_student_record


class InMemoryRecordStore(RecordStore):
    """Process-local store used for tests and the testing settings."""

    def __init__(self):
        self._by_date: dict[str, list[AttendanceRecord]] = {}

    def records_for(self, date_key: str) -> Sequence[AttendanceRecord]:
        return list(self._by_date.get(date_key, []))

    def append(self, date_key: str, record: AttendanceRecord) -> None:
        self._by_date.setdefault(date_key, []).append(record)

    def insert_if_absent(self, date_key: str, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        existing = find_student_record(self.records_for(date_key), record.student_id)
        if existing:
            return existing
        self.append(date_key, record)
        return None
