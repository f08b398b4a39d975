from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """Thực thể miền (domain): Sinh viên.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập lưu trữ).
    """

    student_id: str
    name: str
    first_name: str = ""
    last_name: str = ""
    middle_initial: str = ""
    email: str = ""
