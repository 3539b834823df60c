from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Student
from .repository import StudentRepository


def _row_to_student(r: dict) -> Student:
    return Student(id=int(r["id"]), name=r["name"], roll_number=r["rollNumber"])


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, rollNumber FROM students ORDER BY name")
            return [_row_to_student(r) for r in fetchall(cur)]

    def create(self, *, name: str, roll_number: str) -> Student:
        # A duplicate rollNumber hits the UNIQUE key and surfaces as ConstraintViolation.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO students(name, rollNumber) VALUES(%s,%s)",
                (name, roll_number),
            )
            return Student(id=int(cur.lastrowid), name=name, roll_number=roll_number)

    def update(self, student: Student) -> Student:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET name=%s, rollNumber=%s WHERE id=%s",
                (student.name, student.roll_number, int(student.id)),
            )
            return student

    def delete_by_id(self, student_id: int) -> bool:
        # student_attendance rows go with it (ON DELETE CASCADE).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (int(student_id),))
            return cur.rowcount > 0
