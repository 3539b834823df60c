from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        """All sessions, newest date first."""
        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        """Upsert keyed by record.id; the student list is replaced, never merged."""
        raise NotImplementedError

    def delete_by_id(self, record_id: str) -> bool:
        raise NotImplementedError
