from __future__ import annotations

import json
import logging
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import StoreUnavailableError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import RecordStore, find_student_record

logger = logging.getLogger(__name__)


class MySQLRecordStore(RecordStore):
    """Records kept in a local MySQL database.

    Each row carries the record's JSON form; rows for a date come back in insertion
    order. ``attendance_days`` has one row per date and is locked to serialise
    ``insert_if_absent`` for that date.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_records(rows) -> list[AttendanceRecord]:
        return [AttendanceRecord.from_dict(json.loads(r["payload"])) for r in rows]

    def _select(self, cur, date_key: str) -> list[AttendanceRecord]:
        cur.execute(
            """
            SELECT payload
            FROM attendance_records
            WHERE date_key=%s
            ORDER BY record_id
            """,
            (date_key,),
        )
        return self._to_records(fetchall(cur))

    @staticmethod
    def _insert(cur, date_key: str, record: AttendanceRecord) -> None:
        cur.execute("INSERT IGNORE INTO attendance_days(date_key) VALUES(%s)", (date_key,))
        cur.execute(
            """
            INSERT INTO attendance_records(date_key, student_id, payload)
            VALUES(%s,%s,%s)
            """,
            (date_key, record.student_id, json.dumps(record.to_dict(), ensure_ascii=False)),
        )

    def records_for(self, date_key: str) -> Sequence[AttendanceRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                return self._select(cur, date_key)
        except mysql.connector.Error as e:
            logger.error("records_for(%s) failed: %s", date_key, e)
            raise StoreUnavailableError("Attendance database is unavailable") from e

    def append(self, date_key: str, record: AttendanceRecord) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                self._insert(cur, date_key, record)
        except mysql.connector.Error as e:
            logger.error("append(%s) failed: %s", date_key, e)
            raise StoreUnavailableError("Attendance database is unavailable") from e

    def insert_if_absent(self, date_key: str, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("INSERT IGNORE INTO attendance_days(date_key) VALUES(%s)", (date_key,))
                cur.execute("SELECT date_key FROM attendance_days WHERE date_key=%s FOR UPDATE", (date_key,))
                cur.fetchall()

                existing = find_student_record(self._select(cur, date_key), record.student_id)
                if existing:
                    return existing
                self._insert(cur, date_key, record)
                return None
        except mysql.connector.Error as e:
            logger.error("insert_if_absent(%s) failed: %s", date_key, e)
            raise StoreUnavailableError("Attendance database is unavailable") from e
