from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from src.attentrack.attentrack.attendance.model import AttendanceRecord, sort_newest_first
from src.attentrack.attentrack.core.exceptions import ConstraintViolation
from src.attentrack.attentrack.database.connection import DBConfig
from src.attentrack.attentrack.storage.kv_store import MemoryStore
from src.attentrack.attentrack.storage.local import LocalBackend
from src.attentrack.attentrack.students.model import Student


@pytest.fixture
def fixed_today() -> date:
    # A Wednesday.
    return date(2024, 1, 10)


# -------------------------- relational stand-in --------------------------
class InMemoryRelational:
    """Behaves like RelationalBackend: unique roll numbers, cascading deletes, upserts."""

    def __init__(self, *, init_result: bool = True, init_error: Optional[Exception] = None):
        self.init_result = init_result
        self.init_error = init_error
        self.init_calls = 0
        self.fail_with: Optional[Exception] = None
        self.students: dict[int, Student] = {}
        self.records: dict[str, AttendanceRecord] = {}
        self._next_id = 0

    def initialize(self) -> bool:
        self.init_calls += 1
        if self.init_error is not None:
            raise self.init_error
        return self.init_result

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def get_students(self):
        self._check()
        return sorted(self.students.values(), key=lambda s: s.name)

    def add_student(self, name, roll_number):
        self._check()
        if any(s.roll_number == roll_number for s in self.students.values()):
            raise ConstraintViolation(f"Duplicate entry {roll_number!r} for key 'rollNumber'")
        self._next_id += 1
        student = Student(id=self._next_id, name=name, roll_number=roll_number)
        self.students[student.id] = student
        return student

    def update_student(self, student):
        self._check()
        if student.id in self.students:
            self.students[student.id] = student
        return student

    def delete_student(self, student_id):
        self._check()
        removed = self.students.pop(student_id, None) is not None
        for rid, r in list(self.records.items()):
            self.records[rid] = r.without_student(student_id)
        return removed

    def get_attendance_records(self):
        self._check()
        return sort_newest_first(self.records.values())

    def save_attendance_record(self, record):
        self._check()
        self.records[record.id] = record
        return record

    def delete_attendance_record(self, record_id):
        self._check()
        return self.records.pop(record_id, None) is not None


@pytest.fixture
def relational() -> InMemoryRelational:
    return InMemoryRelational()


@pytest.fixture
def local_backend() -> LocalBackend:
    return LocalBackend(MemoryStore())


# -------------------------- scripted MySQL driver --------------------------
def _normalize(sql: str) -> str:
    return " ".join(sql.split())


class FakeCursor:
    def __init__(self, db: "FakeDatabase"):
        self._db = db
        self._rows: list = []
        self.lastrowid = None
        self.rowcount = 0

    def execute(self, sql, params=None):
        stmt = _normalize(sql)
        self._db.executed.append((stmt, tuple(params or ())))
        for fragment, exc in self._db.failures:
            if fragment in stmt:
                raise exc

        self._rows = []
        for fragment, response in self._db.responses.items():
            if fragment in stmt:
                self._rows = list(response(params) if callable(response) else response)
                break
        self.rowcount = self._db.rowcount
        if stmt.startswith("INSERT"):
            self._db.last_insert_id += 1
            self.lastrowid = self._db.last_insert_id

    def fetchall(self):
        return self._rows

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def close(self):
        self._db.cursors_closed += 1


class FakeConnection:
    def __init__(self, db: "FakeDatabase"):
        self._db = db

    def cursor(self, dictionary=False):
        return FakeCursor(self._db)

    def commit(self):
        self._db.commits += 1

    def rollback(self):
        self._db.rollbacks += 1

    def close(self):
        self._db.released += 1


class FakeDatabase:
    """Duck-types DatabaseConnection: records statements, scripts results and failures."""

    def __init__(self):
        self.config = DBConfig(host="db.local", port=3306, user="root", password="secret", database="attentrack")
        self.executed: list[tuple[str, tuple]] = []
        self.responses: dict = {}
        self.failures: list[tuple[str, Exception]] = []
        self.connect_errors: list[Exception] = []
        self.server_error: Optional[Exception] = None
        self.rowcount = 1
        self.last_insert_id = 0
        self.commits = 0
        self.rollbacks = 0
        self.acquired = 0
        self.released = 0
        self.cursors_closed = 0
        self.server_connects = 0
        self.discards = 0

    def connect(self):
        if self.connect_errors:
            raise self.connect_errors.pop(0)
        self.acquired += 1
        return FakeConnection(self)

    def connect_server(self):
        if self.server_error is not None:
            raise self.server_error
        self.server_connects += 1
        self.acquired += 1
        return FakeConnection(self)

    def discard_pool(self):
        self.discards += 1

    def statements(self) -> list[str]:
        return [stmt for stmt, _ in self.executed]


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def make_relational():
    """Factory for relational stand-ins with a scripted initialize()."""
    return InMemoryRelational
