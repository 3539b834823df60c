from __future__ import annotations

from typing import Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..students.model import Student


class StorageBackend(Protocol):
    """The method surface shared by both backends and by the facade."""

    def get_students(self) -> Sequence[Student]:
        raise NotImplementedError

    def add_student(self, name: str, roll_number: str) -> Student:
        raise NotImplementedError

    def update_student(self, student: Student) -> Student:
        raise NotImplementedError

    def delete_student(self, student_id: int) -> bool:
        raise NotImplementedError

    def get_attendance_records(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def save_attendance_record(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def delete_attendance_record(self, record_id: str) -> bool:
        raise NotImplementedError


class RelationalStorageBackend(StorageBackend, Protocol):
    def initialize(self) -> bool:
        """Bring the backend up; False when it is reachable but unusable."""
        raise NotImplementedError
