from __future__ import annotations

import logging
from typing import Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..attendance.model import AttendanceRecord
from ..attendance.mysql_attendance_repository import MySQLAttendanceRepository
from ..attendance.repository import AttendanceRepository
from ..core.exceptions import UnknownDatabase
from ..database.bootstrap import apply_schema, ensure_database_exists, load_schema
from ..database.connection import DatabaseConnection
from ..database.mysql_base import classify_connect_error
from ..students.model import Student
from ..students.mysql_student_repository import MySQLStudentRepository
from ..students.repository import StudentRepository
from .base import RelationalStorageBackend

logger = logging.getLogger(__name__)


class RelationalBackend(RelationalStorageBackend):
    """MySQL backend: pooled connections, idempotent schema, transactional writes."""

    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        students: Optional[StudentRepository] = None,
        attendance: Optional[AttendanceRepository] = None,
        schema: Optional[Sequence[str]] = None,
    ):
        self._conn_factory = conn_factory
        self._students = students or MySQLStudentRepository(conn_factory)
        self._attendance = attendance or MySQLAttendanceRepository(conn_factory)
        self._schema = list(schema) if schema is not None else None

    def _connect_creating_database(self):
        try:
            return self._conn_factory.connect()
        except mysql.connector.Error as err:
            if getattr(err, "errno", None) != errorcode.ER_BAD_DB_ERROR:
                raise classify_connect_error(err) from err
            logger.info("Database %r missing, creating it", self._conn_factory.config.database)

        try:
            ensure_database_exists(self._conn_factory)
        except mysql.connector.Error as err:
            raise UnknownDatabase(
                f"database {self._conn_factory.config.database!r} does not exist and could not be created: {err}"
            ) from err

        self._conn_factory.discard_pool()
        try:
            return self._conn_factory.connect()
        except mysql.connector.Error as err:
            raise classify_connect_error(err) from err

    def initialize(self) -> bool:
        """Open the pool, create the database and tables when missing.

        Returns False when the schema cannot be applied; raises a
        ConnectivityError subclass when the server cannot be used at all.
        """
        conn = self._connect_creating_database()
        try:
            statements = self._schema if self._schema is not None else load_schema()
            count = apply_schema(conn, statements)
        except mysql.connector.Error as err:
            logger.error("Applying schema to %s failed: %s", self._conn_factory.config.describe(), err)
            return False
        finally:
            conn.close()
        logger.info("Schema ready on %s (%d statements)", self._conn_factory.config.describe(), count)
        return True

    def get_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def add_student(self, name: str, roll_number: str) -> Student:
        return self._students.create(name=name, roll_number=roll_number)

    def update_student(self, student: Student) -> Student:
        return self._students.update(student)

    def delete_student(self, student_id: int) -> bool:
        return self._students.delete_by_id(student_id)

    def get_attendance_records(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    def save_attendance_record(self, record: AttendanceRecord) -> AttendanceRecord:
        return self._attendance.save(record)

    def delete_attendance_record(self, record_id: str) -> bool:
        return self._attendance.delete_by_id(record_id)
