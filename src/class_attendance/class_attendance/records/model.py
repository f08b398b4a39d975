from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): bằng chứng sinh viên có mặt trong một ngày.

    Student fields are a snapshot taken at mark time; the record does not
    reference a live student.
    """

    student_id: str
    student_name: str
    first_name: str
    last_name: str
    middle_initial: str
    email: str
    marked_at: str
    date: str

    def to_dict(self) -> dict:
        """Stored/wire form. Key names are part of the data format."""
        return {
            "studentId": self.student_id,
            "studentName": self.student_name,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "middleInitial": self.middle_initial,
            "email": self.email,
            "markedAt": self.marked_at,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        # Records written by the first dashboard kept the mark time under "timestamp".
        marked_at = data.get("markedAt", data.get("timestamp", ""))
        return cls(
            student_id=str(data["studentId"]),
            student_name=str(data.get("studentName") or ""),
            first_name=str(data.get("firstName") or ""),
            last_name=str(data.get("lastName") or ""),
            middle_initial=str(data.get("middleInitial") or ""),
            email=str(data.get("email") or ""),
            marked_at=str(marked_at or ""),
            date=str(data["date"]),
        )
