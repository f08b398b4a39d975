from __future__ import annotations

import logging

from .connection import DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

# Idempotent: CREATE IF NOT EXISTS only.
SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS attendance_days (
        date_key VARCHAR(32) NOT NULL PRIMARY KEY
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS attendance_records (
        record_id BIGINT NOT NULL AUTO_INCREMENT PRIMARY KEY,
        date_key VARCHAR(32) NOT NULL,
        student_id VARCHAR(128) NOT NULL,
        payload TEXT NOT NULL,
        INDEX idx_attendance_date_student (date_key, student_id)
    )
    """,
)


def apply_schema(conn_factory: DatabaseConnection) -> None:
    with db_cursor(conn_factory) as (_, cur):
        for statement in SCHEMA_STATEMENTS:
            cur.execute(statement)
    logger.info("Attendance schema ready (%d statements)", len(SCHEMA_STATEMENTS))
