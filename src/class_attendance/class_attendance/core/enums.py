from __future__ import annotations

from enum import Enum


class AttendanceState(str, Enum):
    """Trạng thái điểm danh hôm nay của sinh viên (ERROR không bao giờ được lưu)."""

    NOT_MARKED = "NOT_MARKED"
    MARKED = "MARKED"
    ERROR = "ERROR"


class ScanResult(str, Enum):
    """Kết quả của một lần quét mã."""

    ACCEPTED = "ACCEPTED"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    WRONG_DATE = "WRONG_DATE"
    ALREADY_MARKED = "ALREADY_MARKED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class ReportStatus(str, Enum):
    """Mức chuyên cần dùng cho báo cáo."""

    GOOD = "Good"
    WARNING = "Warning"
    POOR = "Poor"
