from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceState, ScanResult
from ..records.model import AttendanceRecord


@dataclass(frozen=True)
class StatusView:
    """Trạng thái hiển thị ban đầu của màn hình điểm danh."""

    state: AttendanceState
    marked_at: Optional[str] = None
    message: str = ""

    def to_dict(self) -> dict:
        return {"state": self.state.value, "markedAt": self.marked_at, "message": self.message}


@dataclass(frozen=True)
class ScanOutcome:
    """Result of one scan attempt. Every outcome is terminal for that attempt."""

    result: ScanResult
    message: str
    record: Optional[AttendanceRecord] = None

    @property
    def accepted(self) -> bool:
        return self.result == ScanResult.ACCEPTED

    @property
    def marked_at(self) -> Optional[str]:
        return self.record.marked_at if self.record else None

    @property
    def state(self) -> AttendanceState:
        if self.result in (ScanResult.ACCEPTED, ScanResult.ALREADY_MARKED):
            return AttendanceState.MARKED
        return AttendanceState.ERROR

    def to_dict(self) -> dict:
        return {
            "result": self.result.value,
            "state": self.state.value,
            "accepted": self.accepted,
            "message": self.message,
            "markedAt": self.marked_at,
            "record": self.record.to_dict() if self.record else None,
        }
