from __future__ import annotations

from typing import Sequence

from ..common.validators import require_non_empty, require_unique_roll_number
from ..storage.base import StorageBackend
from .model import Student


class StudentService:
    """Use cases for the class roll.

    Validation lives here: the local store has no unique constraint, so a
    duplicate roll number must be rejected before it reaches any backend.
    """

    def __init__(self, store: StorageBackend):
        self._store = store

    def list_students(self, query: str = "") -> Sequence[Student]:
        students = self._store.get_students()
        q = (query or "").strip().lower()
        if not q:
            return list(students)
        return [s for s in students if q in s.name.lower() or q in s.roll_number.lower()]

    def get_student(self, student_id: int):
        for s in self._store.get_students():
            if s.id == student_id:
                return s
        return None

    def add_student(self, name: str, roll_number: str) -> Student:
        name = require_non_empty(name, "Student name")
        roll_number = require_non_empty(roll_number, "Roll number")
        require_unique_roll_number(roll_number, self._store.get_students())
        return self._store.add_student(name, roll_number)

    def update_student(self, student_id: int, name: str, roll_number: str) -> Student:
        name = require_non_empty(name, "Student name")
        roll_number = require_non_empty(roll_number, "Roll number")
        require_unique_roll_number(roll_number, self._store.get_students(), exclude_id=student_id)
        return self._store.update_student(Student(id=int(student_id), name=name, roll_number=roll_number))

    def delete_student(self, student_id: int) -> bool:
        return self._store.delete_student(int(student_id))
