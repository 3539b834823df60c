"""Sample roll and demo sessions used to populate an empty store."""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Iterator, Optional, Sequence

from ..attendance.model import AttendanceRecord, StudentAttendance, sort_newest_first
from ..core.enums import AttendanceStatus
from ..students.model import Student

STUDENT_NAMES = (
    "Aarav Sharma", "Aditi Patel", "Arjun Singh", "Ananya Verma", "Advait Joshi",
    "Aisha Khan", "Aryan Mehta", "Avni Gupta", "Dhruv Kumar", "Diya Reddy",
    "Ishaan Malhotra", "Isha Kapoor", "Kabir Bedi", "Kiara Agarwal", "Krishna Rao",
    "Lakshmi Nair", "Manav Choudhary", "Meera Banerjee", "Neha Desai", "Nikhil Gandhi",
    "Ojas Trivedi", "Pari Saxena", "Pranav Thakur", "Prisha Iyer", "Rahul Dubey",
    "Riya Shah", "Rohan Bajaj", "Saanvi Chauhan", "Samar Ahuja", "Sanya Bhatia",
    "Shaurya Sen", "Shreya Sharma", "Siddharth Pillai", "Siya Chakraborty", "Tanvi Menon",
    "Tara Hegde", "Udayan Chowdhury", "Vanya Singh", "Vedant Khanna", "Vihaan Mehra",
    "Yash Mitra", "Zara Ahmed", "Dev Kumar", "Anika Lahiri", "Arnav Bhatt",
    "Kavya Goyal", "Reyansh Rana", "Ishita Sen", "Vivaan Malik", "Myra Prasad",
)

CLASS_TITLES = (
    "Mathematics 101",
    "Physics 201",
    "Chemistry 101",
    "Biology 301",
    "Computer Science 201",
    "English Literature",
    "History of India",
)


def roll_number_for(position: int) -> str:
    return f"R{position:03d}"


def bootstrap_students() -> Iterator[tuple[str, str]]:
    """(name, roll number) pairs R001..R050 in roll order."""
    for i, name in enumerate(STUDENT_NAMES, start=1):
        yield name, roll_number_for(i)


def _random_status(rng: random.Random) -> AttendanceStatus:
    # 80% present, 15% absent, 5% late
    roll = rng.random()
    if roll < 0.80:
        return AttendanceStatus.PRESENT
    if roll < 0.95:
        return AttendanceStatus.ABSENT
    return AttendanceStatus.LATE


def sample_attendance(
    students: Sequence[Student],
    *,
    today: date,
    rng: Optional[random.Random] = None,
    sessions: int = 15,
    days: int = 21,
) -> list[AttendanceRecord]:
    rng = rng or random.Random()
    records = []
    for i in range(sessions):
        day = today - timedelta(days=rng.randrange(days))
        records.append(
            AttendanceRecord(
                id=f"attendance-{day.isoformat()}-{i}",
                date=day,
                class_title=rng.choice(CLASS_TITLES),
                students=tuple(StudentAttendance(student_id=s.id, status=_random_status(rng)) for s in students),
            )
        )
    return sort_newest_first(records)
