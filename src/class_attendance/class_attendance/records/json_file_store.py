from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence, Union

from ..core.constants import STORE_KEY_PREFIX
from ..core.exceptions import StoreUnavailableError, ValidationError
from .model import AttendanceRecord
from .repository import RecordStore, find_student_record

logger = logging.getLogger(__name__)


class JsonFileRecordStore(RecordStore):
    """Local store: one JSON array file per date key.

    ``<root>/attendance-Mon Jan 01 2024.json`` holds the records for that day.
    Files are created lazily on the first append for a date.
    """

    def __init__(self, root: Union[str, Path]):
        self._root = Path(root)

    def _path(self, date_key: str) -> Path:
        # Date keys map one-to-one onto file names inside the store directory.
        if "/" in date_key or os.sep in date_key or (os.altsep and os.altsep in date_key) or date_key in ("", ".", ".."):
            raise ValidationError(f"Invalid date key: {date_key!r}")
        return self._root / f"{STORE_KEY_PREFIX}{date_key}.json"

    def _load(self, date_key: str) -> list[dict]:
        path = self._path(date_key)
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Cannot read attendance file %s: %s", path, e)
            raise StoreUnavailableError(f"Cannot read attendance data for {date_key}") from e

        if not isinstance(data, list):
            logger.error("Attendance file %s does not hold a JSON array", path)
            raise StoreUnavailableError(f"Attendance data for {date_key} is corrupted")
        return data

    def _save(self, date_key: str, items: list[dict]) -> None:
        path = self._path(date_key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Atomic replace: readers never see a partial file.
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False, indent=4)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise
        except OSError as e:
            logger.error("Cannot write attendance file %s: %s", path, e)
            raise StoreUnavailableError(f"Cannot save attendance data for {date_key}") from e

    def records_for(self, date_key: str) -> Sequence[AttendanceRecord]:
        try:
            return [AttendanceRecord.from_dict(item) for item in self._load(date_key)]
        except (KeyError, TypeError, AttributeError) as e:
            logger.error("Malformed record under %s: %s", date_key, e)
            raise StoreUnavailableError(f"Attendance data for {date_key} is corrupted") from e

    def append(self, date_key: str, record: AttendanceRecord) -> None:
        items = self._load(date_key)
        items.append(record.to_dict())
        self._save(date_key, items)
        logger.debug("Stored record for %s under %s (%d total)", record.student_id, date_key, len(items))

    def insert_if_absent(self, date_key: str, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        existing = find_student_record(self.records_for(date_key), record.student_id)
        if existing:
            return existing
        self.append(date_key, record)
        return None
