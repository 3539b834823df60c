from __future__ import annotations

from typing import Sequence

from ..attendance.local_attendance_repository import LocalAttendanceRepository
from ..attendance.model import AttendanceRecord
from ..students.local_student_repository import LocalStudentRepository
from ..students.model import Student
from .base import StorageBackend
from .kv_store import KeyValueStore


class LocalBackend(StorageBackend):
    """Fallback backend over a key/value store. No transactions, no constraints."""

    def __init__(self, store: KeyValueStore):
        self._store = store
        self._students = LocalStudentRepository(store)
        self._attendance = LocalAttendanceRepository(store)

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def get_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def add_student(self, name: str, roll_number: str) -> Student:
        return self._students.create(name=name, roll_number=roll_number)

    def update_student(self, student: Student) -> Student:
        return self._students.update(student)

    def delete_student(self, student_id: int) -> bool:
        removed = self._students.delete_by_id(student_id)
        # Same effect as the relational ON DELETE CASCADE.
        self._attendance.remove_student(student_id)
        return removed

    def get_attendance_records(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    def save_attendance_record(self, record: AttendanceRecord) -> AttendanceRecord:
        return self._attendance.save(record)

    def delete_attendance_record(self, record_id: str) -> bool:
        return self._attendance.delete_by_id(record_id)
