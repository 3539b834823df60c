from __future__ import annotations

from typing import Sequence

from ..core.constants import ATTENDANCE_KEY
from ..storage.kv_store import KeyValueStore, read_collection, write_collection
from .model import AttendanceRecord, sort_newest_first
from .repository import AttendanceRepository


class LocalAttendanceRepository(AttendanceRepository):
    """Attendance sessions as one JSON array, kept newest first."""

    def __init__(self, store: KeyValueStore, *, key: str = ATTENDANCE_KEY):
        self._store = store
        self._key = key

    def list_all(self) -> Sequence[AttendanceRecord]:
        return [AttendanceRecord.from_dict(d) for d in read_collection(self._store, self._key)]

    def _write(self, records: Sequence[AttendanceRecord]) -> None:
        write_collection(self._store, self._key, [r.to_dict() for r in records])

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        records = list(self.list_all())
        for i, existing in enumerate(records):
            if existing.id == record.id:
                records[i] = record
                break
        else:
            records.insert(0, record)
        self._write(sort_newest_first(records))
        return record

    def delete_by_id(self, record_id: str) -> bool:
        records = list(self.list_all())
        kept = [r for r in records if r.id != record_id]
        self._write(kept)
        return len(kept) != len(records)

    def remove_student(self, student_id: int) -> int:
        """Drop a student's entries from every session; returns how many sessions changed."""
        changed = 0
        records = []
        for r in self.list_all():
            if r.status_for(student_id) is not None:
                r = r.without_student(student_id)
                changed += 1
            records.append(r)
        if changed:
            self._write(records)
        return changed
