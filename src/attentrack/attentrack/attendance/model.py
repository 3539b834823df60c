from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import as_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def parse_status(value: Any) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}") from None


@dataclass(frozen=True)
class StudentAttendance:
    """One student's status inside a session."""

    student_id: int
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {"studentId": self.student_id, "status": self.status.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StudentAttendance":
        return cls(
            student_id=int(data.get("studentId", data.get("student_id"))),
            status=parse_status(data["status"]),
        )


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one class session and the status of every evaluated student.

    The id is chosen by the caller; saving again with the same id replaces
    the whole student list.
    """

    id: str
    date: date
    class_title: str
    students: tuple[StudentAttendance, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept lists from callers but keep the entity hashable and immutable.
        if not isinstance(self.students, tuple):
            object.__setattr__(self, "students", tuple(self.students))

    @property
    def iso_date(self) -> str:
        return self.date.strftime("%Y-%m-%d")

    def status_for(self, student_id: int) -> Optional[AttendanceStatus]:
        for entry in self.students:
            if entry.student_id == student_id:
                return entry.status
        return None

    def count(self, status: AttendanceStatus) -> int:
        return sum(1 for entry in self.students if entry.status == status)

    def without_student(self, student_id: int) -> "AttendanceRecord":
        return AttendanceRecord(
            id=self.id,
            date=self.date,
            class_title=self.class_title,
            students=tuple(s for s in self.students if s.student_id != student_id),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.iso_date,
            "classTitle": self.class_title,
            "students": [s.to_dict() for s in self.students],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        return cls(
            id=str(data["id"]),
            date=as_date(data["date"]),
            class_title=str(data.get("classTitle", data.get("class_title", ""))),
            students=tuple(StudentAttendance.from_dict(s) for s in data.get("students") or []),
        )


def sort_newest_first(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    """Stable sort by date descending; records sharing a date keep their relative order."""
    return sorted(records, key=lambda r: r.date, reverse=True)
