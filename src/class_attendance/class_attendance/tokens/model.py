from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import ATTENDANCE_TOKEN_KIND


@dataclass(frozen=True)
class AttendanceToken:
    """Thực thể miền (domain): mã điểm danh đã giải mã từ QR.

    Only constructed through ``parse_token`` / ``issue_token``.
    """

    session_date: str
    session_id: str = ""
    issued_at_millis: Optional[int] = None
    kind: str = ATTENDANCE_TOKEN_KIND

    def to_dict(self) -> dict:
        data = {
            "kind": self.kind,
            "sessionDate": self.session_date,
            "sessionId": self.session_id,
        }
        if self.issued_at_millis is not None:
            data["issuedAtMillis"] = self.issued_at_millis
        return data
