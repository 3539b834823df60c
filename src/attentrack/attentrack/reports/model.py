from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class DailyCounts:
    date: date
    label: str
    present: int = 0
    absent: int = 0
    late: int = 0
    total: int = 0


@dataclass(frozen=True)
class DailyTrend:
    """Percentages for one day; all zero when nothing was recorded."""

    date: date
    weekday: str
    present: int
    absent: int
    late: int


@dataclass(frozen=True)
class OverallSummary:
    present: int
    absent: int
    late: int
    total: int
    sessions: int
    present_percentage: int
    absent_percentage: int
    late_percentage: int


@dataclass(frozen=True)
class StudentRate:
    student_id: int
    name: str
    roll_number: str
    present: int
    absent: int
    late: int
    total: int
    attendance_percentage: int


@dataclass(frozen=True)
class ClassRate:
    class_title: str
    present: int
    absent: int
    late: int
    sessions: int


@dataclass(frozen=True)
class SessionSummary:
    record_id: str
    date: date
    class_title: str
    present: int
    absent: int
    late: int
    total: int
    present_percentage: int


@dataclass(frozen=True)
class Dashboard:
    time_range: str
    today: date
    weekly: list[DailyCounts] = field(default_factory=list)
    trend: list[DailyTrend] = field(default_factory=list)
    overall: OverallSummary | None = None
    classes: list[ClassRate] = field(default_factory=list)
    students: list[StudentRate] = field(default_factory=list)
    recent: list[SessionSummary] = field(default_factory=list)


@dataclass(frozen=True)
class ScheduleDay:
    date: date
    weekday: str
    is_today: bool
    sessions: list[SessionSummary] = field(default_factory=list)
    present: int = 0
    total: int = 0
    percentage: int = 0


@dataclass(frozen=True)
class WeekSchedule:
    """A Monday-to-Sunday week; week_offset 0 is the current week, -1 the one before."""

    week_offset: int
    start: date
    end: date
    label: str
    days: list[ScheduleDay] = field(default_factory=list)
    total_sessions: int = 0
    average_attendance: int = 0
