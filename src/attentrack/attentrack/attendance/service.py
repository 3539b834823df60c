from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import as_date, today_local
from ..common.identifiers import generate_attendance_id
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..storage.base import StorageBackend
from ..students.model import Student
from .model import AttendanceRecord, StudentAttendance, parse_status


class AttendanceService:
    def __init__(
        self,
        store: StorageBackend,
        *,
        id_factory: Callable[[], str] = generate_attendance_id,
        today: Callable[[], date] = today_local,
    ):
        self._store = store
        self._id_factory = id_factory
        self._today = today

    def new_sheet(self, students: Iterable[Student]) -> dict[int, AttendanceStatus]:
        """Blank sheet for taking attendance: everyone starts as present."""
        return {s.id: AttendanceStatus.PRESENT for s in students}

    def record_session(
        self,
        class_title: str,
        statuses: Mapping[int, object],
        *,
        on_date: Optional[object] = None,
        record_id: Optional[str] = None,
    ) -> AttendanceRecord:
        """Save one session. Passing an existing record_id overwrites that session."""
        class_title = require_non_empty(class_title, "Class title")
        if not statuses:
            raise ValidationError("At least one student must be marked")

        record = AttendanceRecord(
            id=record_id or self._id_factory(),
            date=as_date(on_date) if on_date is not None else self._today(),
            class_title=class_title,
            students=tuple(
                StudentAttendance(student_id=int(sid), status=parse_status(status))
                for sid, status in statuses.items()
            ),
        )
        return self._store.save_attendance_record(record)

    def list_records(self) -> Sequence[AttendanceRecord]:
        return self._store.get_attendance_records()

    def get_record(self, record_id: str) -> Optional[AttendanceRecord]:
        for r in self._store.get_attendance_records():
            if r.id == record_id:
                return r
        return None

    def delete_record(self, record_id: str) -> bool:
        return self._store.delete_attendance_record(record_id)
