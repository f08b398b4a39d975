from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class RecordStore(Protocol):
    """Giao diện repository cho bản ghi điểm danh, khoá theo ngày.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp
    vào phương tiện lưu trữ cụ thể. Failures of the medium raise StoreUnavailableError.
    """

    def records_for(self, date_key: str) -> Sequence[AttendanceRecord]:
        """Records filed under ``date_key`` in insertion order; empty when none."""

        raise NotImplementedError

    def append(self, date_key: str, record: AttendanceRecord) -> None:
        """Add ``record`` under ``date_key``. Duplicates are not rejected here."""

        raise NotImplementedError

    def insert_if_absent(self, date_key: str, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        """Append unless ``record.student_id`` already has a record for ``date_key``.

        Returns the existing record, or None when ``record`` was stored.
        """

        raise NotImplementedError


def find_student_record(records: Sequence[AttendanceRecord], student_id: str) -> Optional[AttendanceRecord]:
    for r in records:
        if r.student_id == student_id:
            return r
    return None
