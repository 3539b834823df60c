from __future__ import annotations

import random
from datetime import date

from src.attentrack.attentrack.core.enums import AttendanceStatus
from src.attentrack.attentrack.fixtures.seed import CLASS_TITLES, bootstrap_students, sample_attendance
from src.attentrack.attentrack.students.model import Student


def test_bootstrap_students_are_fifty_unique_rolls():
    pairs = list(bootstrap_students())

    assert len(pairs) == 50
    assert pairs[0] == ("Aarav Sharma", "R001")
    assert pairs[-1][1] == "R050"
    assert len({roll for _, roll in pairs}) == 50


def test_sample_attendance_is_deterministic_with_a_seeded_rng():
    students = [Student(i, name, roll) for i, (name, roll) in enumerate(bootstrap_students(), start=1)]
    today = date(2024, 1, 10)

    first = sample_attendance(students, today=today, rng=random.Random(7))
    second = sample_attendance(students, today=today, rng=random.Random(7))

    assert first == second
    assert len(first) == 15
    assert all(today.toordinal() - r.date.toordinal() < 21 for r in first)
    assert all(r.class_title in CLASS_TITLES for r in first)
    assert [r.date for r in first] == sorted((r.date for r in first), reverse=True)
    assert all(len(r.students) == 50 for r in first)
    statuses = {e.status for r in first for e in r.students}
    assert AttendanceStatus.PRESENT in statuses
