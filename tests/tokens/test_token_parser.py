from __future__ import annotations

import json
from datetime import date, datetime

import pytest

from src.class_attendance.class_attendance.core.exceptions import MalformedTokenError, ValidationError
from src.class_attendance.class_attendance.tokens.model import AttendanceToken
from src.class_attendance.class_attendance.tokens.parser import encode_token, issue_token, parse_token


def test_parse_canonical_payload():
    raw = json.dumps(
        {"kind": "attendance", "sessionDate": "Mon Jan 01 2024", "sessionId": "s1", "issuedAtMillis": 1}
    )

    token = parse_token(raw)

    assert token == AttendanceToken(session_date="Mon Jan 01 2024", session_id="s1", issued_at_millis=1)


def test_parse_accepts_legacy_scanner_keys():
    raw = json.dumps({"type": "attendance", "date": "Mon Jan 01 2024", "sessionId": "s", "timestamp": 5})

    token = parse_token(raw)

    assert token.session_date == "Mon Jan 01 2024"
    assert token.issued_at_millis == 5


def test_only_kind_and_session_date_are_required():
    token = parse_token('{"kind": "attendance", "sessionDate": "Mon Jan 01 2024"}')

    assert token.session_id == ""
    assert token.issued_at_millis is None


def test_unknown_keys_are_ignored():
    token = parse_token('{"kind": "attendance", "sessionDate": "Mon Jan 01 2024", "room": "B12"}')

    assert token.session_date == "Mon Jan 01 2024"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "not json",
        "{",
        "[]",
        '"attendance"',
        "42",
        "null",
        '{"sessionDate": "Mon Jan 01 2024"}',
        '{"kind": "attendance"}',
        '{"kind": "attendance", "sessionDate": ""}',
        '{"kind": "attendance", "sessionDate": 20240101}',
        '{"kind": "payment", "sessionDate": "Mon Jan 01 2024"}',
        '{"kind": "attendance", "sessionDate": "Mon Jan 01 2024", "sessionId": 7}',
        '{"kind": "attendance", "sessionDate": "Mon Jan 01 2024", "issuedAtMillis": "soon"}',
        '{"kind": "attendance", "sessionDate": "Mon Jan 01 2024", "issuedAtMillis": true}',
    ],
)
def test_malformed_payloads_are_rejected(raw):
    with pytest.raises(MalformedTokenError):
        parse_token(raw)


def test_non_string_input_is_rejected():
    with pytest.raises(MalformedTokenError):
        parse_token(None)


def test_malformed_token_is_a_validation_error():
    assert issubclass(MalformedTokenError, ValidationError)


def test_issue_token_is_scoped_to_the_given_day():
    now = datetime(2024, 1, 1, 9, 0, 0)

    token = issue_token(date(2024, 1, 1), now=now)

    assert token.kind == "attendance"
    assert token.session_date == "Mon Jan 01 2024"
    assert token.issued_at_millis == int(now.timestamp() * 1000)
    assert token.session_id == f"session-{token.issued_at_millis}"


def test_encoded_token_uses_wire_keys():
    token = issue_token(date(2024, 1, 1), session_id="room-1", now=datetime(2024, 1, 1, 9, 0, 0))

    data = json.loads(encode_token(token))

    assert set(data) == {"kind", "sessionDate", "sessionId", "issuedAtMillis"}
    assert parse_token(encode_token(token)) == token
