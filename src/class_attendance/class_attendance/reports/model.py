from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..core.enums import ReportStatus
from ..records.model import AttendanceRecord


@dataclass(frozen=True)
class Report:
    """Read-model phục vụ báo cáo chuyên cần (tính lại mỗi lần, không lưu)."""

    student_id: str
    window_days: int
    as_of: date
    total_days: int
    present_days: int
    percentage: int
    status: ReportStatus
    records: list[AttendanceRecord] = field(default_factory=list)
    recent_records: list[AttendanceRecord] = field(default_factory=list)

    @property
    def absent_days(self) -> int:
        return self.total_days - self.present_days

    @property
    def below_threshold(self) -> bool:
        return self.status != ReportStatus.GOOD

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "windowDays": self.window_days,
            "asOf": self.as_of.isoformat(),
            "totalDays": self.total_days,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "percentage": self.percentage,
            "status": self.status.value,
            "belowThreshold": self.below_threshold,
            "recentRecords": [r.to_dict() for r in self.recent_records],
        }
