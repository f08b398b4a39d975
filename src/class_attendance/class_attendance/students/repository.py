from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Sequence

from ..common.validators import require_non_empty
from .model import Student


class StudentDirectory(Protocol):
    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError


class InMemoryStudentDirectory(StudentDirectory):
    """Roster loaded from settings (``STUDENTS``)."""

    def __init__(self, students: Iterable[Student] = ()):
        self._by_id = {s.student_id: s for s in students}

    @classmethod
    def from_settings(cls, rows: Iterable[Mapping]) -> "InMemoryStudentDirectory":
        students = []
        for row in rows:
            students.append(
                Student(
                    student_id=require_non_empty(row.get("id", ""), "Student id"),
                    name=require_non_empty(row.get("name", ""), "Student name"),
                    first_name=row.get("first_name", ""),
                    last_name=row.get("last_name", ""),
                    middle_initial=row.get("middle_initial", ""),
                    email=row.get("email", ""),
                )
            )
        return cls(students)

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._by_id.get(student_id)

    def list_all(self) -> Sequence[Student]:
        return list(self._by_id.values())
