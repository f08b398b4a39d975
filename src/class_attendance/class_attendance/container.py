from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .attendance.service import AttendanceMarker
from .core.constants import DEFAULT_REPORT_WINDOW_DAYS
from .core.exceptions import ValidationError
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .records.json_file_store import JsonFileRecordStore
from .records.memory_store import InMemoryRecordStore
from .records.mysql_record_store import MySQLRecordStore
from .records.repository import RecordStore
from .reports.service import ReportAggregator
from .students.repository import InMemoryStudentDirectory, StudentDirectory


@dataclass(frozen=True)
class Container:
    store: RecordStore
    students: StudentDirectory

    marker: AttendanceMarker
    reports: ReportAggregator

    report_window_days: int = DEFAULT_REPORT_WINDOW_DAYS


def build_store(settings: Mapping[str, Any]) -> RecordStore:
    backend = str(settings.get("STORE_BACKEND", "json")).lower()

    if backend == "memory":
        return InMemoryRecordStore()

    if backend == "json":
        return JsonFileRecordStore(Path(settings.get("STORE_PATH", "data/attendance")))

    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(dict(settings.get("DB_CONFIG") or {})))
        if settings.get("AUTO_INIT_DB"):
            apply_schema(conn)
        return MySQLRecordStore(conn)

    raise ValidationError(f"Unknown STORE_BACKEND: {backend!r}")


def build_container(*, settings: Mapping[str, Any]) -> Container:
    # One store instance per process; every component shares it.
    store = build_store(settings)
    students = InMemoryStudentDirectory.from_settings(settings.get("STUDENTS") or [])

    return Container(
        store=store,
        students=students,
        marker=AttendanceMarker(store),
        reports=ReportAggregator(store),
        report_window_days=int(settings.get("REPORT_WINDOW_DAYS", DEFAULT_REPORT_WINDOW_DAYS)),
    )
