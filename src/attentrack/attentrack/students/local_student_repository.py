from __future__ import annotations

from typing import Sequence

from ..core.constants import STUDENTS_KEY
from ..storage.kv_store import KeyValueStore, read_collection, write_collection
from .model import Student
from .repository import StudentRepository


class LocalStudentRepository(StudentRepository):
    """Students as one JSON array in the key/value store.

    Note: no constraints here. Callers check roll-number uniqueness first.
    """

    def __init__(self, store: KeyValueStore, *, key: str = STUDENTS_KEY):
        self._store = store
        self._key = key

    def list_all(self) -> Sequence[Student]:
        return [Student.from_dict(d) for d in read_collection(self._store, self._key)]

    def _write(self, students: Sequence[Student]) -> None:
        write_collection(self._store, self._key, [s.to_dict() for s in students])

    def create(self, *, name: str, roll_number: str) -> Student:
        students = list(self.list_all())
        next_id = max((s.id for s in students), default=0) + 1
        student = Student(id=next_id, name=name, roll_number=roll_number)
        students.append(student)
        self._write(students)
        return student

    def update(self, student: Student) -> Student:
        students = [student if s.id == student.id else s for s in self.list_all()]
        self._write(students)
        return student

    def delete_by_id(self, student_id: int) -> bool:
        students = list(self.list_all())
        kept = [s for s in students if s.id != student_id]
        self._write(kept)
        return len(kept) != len(students)
