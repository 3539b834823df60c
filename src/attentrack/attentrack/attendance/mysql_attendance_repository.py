from __future__ import annotations

import logging
from typing import Sequence

from ..common.datetime_utils import as_date
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord, StudentAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, date, classTitle
                FROM attendance_records
                ORDER BY date DESC, id ASC
                """
            )
            parents = fetchall(cur)

            records: list[AttendanceRecord] = []
            for p in parents:
                cur.execute(
                    """
                    SELECT student_id, status
                    FROM student_attendance
                    WHERE attendance_id=%s
                    ORDER BY id ASC
                    """,
                    (p["id"],),
                )
                entries = tuple(
                    StudentAttendance(student_id=int(r["student_id"]), status=AttendanceStatus(r["status"]))
                    for r in fetchall(cur)
                )
                records.append(
                    AttendanceRecord(
                        id=str(p["id"]),
                        date=as_date(p["date"]),
                        class_title=p["classTitle"],
                        students=entries,
                    )
                )
            return records

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        # One transaction: parent upsert, purge of the old entries, new entries.
        # db_cursor commits only if every statement went through.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(id, date, classTitle)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE date=%s, classTitle=%s
                """,
                (record.id, record.date, record.class_title, record.date, record.class_title),
            )
            cur.execute("DELETE FROM student_attendance WHERE attendance_id=%s", (record.id,))
            for entry in record.students:
                cur.execute(
                    """
                    INSERT INTO student_attendance(attendance_id, student_id, status)
                    VALUES(%s,%s,%s)
                    """,
                    (record.id, int(entry.student_id), entry.status.value),
                )
            logger.debug("Saved attendance %s with %d entries", record.id, len(record.students))
            return record

    def delete_by_id(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE id=%s", (record_id,))
            return cur.rowcount > 0
