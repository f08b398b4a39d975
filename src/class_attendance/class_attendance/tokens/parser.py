"""Wire codec for attendance tokens.

Canonical payload::

    {"kind": "attendance", "sessionDate": "Mon Jan 01 2024",
     "sessionId": "session-1704067200000", "issuedAtMillis": 1704067200000}

Older scanners emit ``type``/``date``/``timestamp``; those keys are read when
the canonical key is missing.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import date_key, now_local
from ..core.constants import ATTENDANCE_TOKEN_KIND
from ..core.exceptions import MalformedTokenError
from .model import AttendanceToken

_ALIASES = {
    "kind": "type",
    "sessionDate": "date",
    "issuedAtMillis": "timestamp",
}


def _field(data: dict, key: str) -> Any:
    if key in data:
        return data[key]
    alias = _ALIASES.get(key)
    if alias is not None:
        return data.get(alias)
    return None


def parse_token(raw: str) -> AttendanceToken:
    if not isinstance(raw, str) or not raw.strip():
        raise MalformedTokenError("Empty attendance code")

    try:
        data = json.loads(raw)
    except ValueError:
        raise MalformedTokenError("Attendance code is not valid JSON") from None

    if not isinstance(data, dict):
        raise MalformedTokenError("Attendance code must be an object")

    kind = _field(data, "kind")
    if kind != ATTENDANCE_TOKEN_KIND:
        raise MalformedTokenError("Not an attendance code")

    session_date = _field(data, "sessionDate")
    if not isinstance(session_date, str) or not session_date.strip():
        raise MalformedTokenError("Attendance code has no session date")

    session_id = _field(data, "sessionId")
    if session_id is None:
        session_id = ""
    elif not isinstance(session_id, str):
        raise MalformedTokenError("Session id must be a string")

    issued_at = _field(data, "issuedAtMillis")
    # bool is an int subclass; reject it explicitly.
    if issued_at is not None and (isinstance(issued_at, bool) or not isinstance(issued_at, int)):
        raise MalformedTokenError("Issue time must be an integer")

    return AttendanceToken(
        kind=kind,
        session_date=session_date,
        session_id=session_id,
        issued_at_millis=issued_at,
    )


def encode_token(token: AttendanceToken) -> str:
    return json.dumps(token.to_dict(), separators=(",", ":"))


def issue_token(
    today: date,
    *,
    session_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AttendanceToken:
    """Create the token an instructor displays for today's session."""
    now = now or now_local()
    millis = int(now.timestamp() * 1000)
    return AttendanceToken(
        session_date=date_key(today),
        session_id=session_id or f"session-{millis}",
        issued_at_millis=millis,
    )
