from __future__ import annotations

from datetime import date

import pytest

from src.attentrack.attentrack.attendance.model import (
    AttendanceRecord,
    StudentAttendance,
    parse_status,
    sort_newest_first,
)
from src.attentrack.attentrack.core.enums import AttendanceStatus
from src.attentrack.attentrack.core.exceptions import ValidationError


def test_from_dict_reads_the_stored_shape():
    record = AttendanceRecord.from_dict(
        {"id": "a1", "date": "2024-01-10", "classTitle": "Math", "students": [{"studentId": 1, "status": "present"}]}
    )

    assert record == AttendanceRecord(
        id="a1",
        date=date(2024, 1, 10),
        class_title="Math",
        students=(StudentAttendance(1, AttendanceStatus.PRESENT),),
    )


def test_students_list_is_frozen_into_a_tuple():
    record = AttendanceRecord("a1", date(2024, 1, 10), "Math", [StudentAttendance(1, AttendanceStatus.LATE)])

    assert isinstance(record.students, tuple)
    assert record.count(AttendanceStatus.LATE) == 1


def test_parse_status_is_case_insensitive_and_strict():
    assert parse_status(" Late ") == AttendanceStatus.LATE
    with pytest.raises(ValidationError):
        parse_status("sick")


def test_sort_newest_first_is_stable_for_ties():
    a = AttendanceRecord("a", date(2024, 1, 1), "Math")
    b = AttendanceRecord("b", date(2024, 1, 5), "Math")
    c = AttendanceRecord("c", date(2024, 1, 1), "Physics")

    assert [r.id for r in sort_newest_first([a, b, c])] == ["b", "a", "c"]
