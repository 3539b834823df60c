"""Derived views over an already-fetched snapshot.

Everything here is a pure function of (records, students, today): no storage
access, no clock reads.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import date, timedelta
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import last_n_days, monday_of_week, one_month_before
from ..core.constants import DEFAULT_RECENT_SESSIONS, DEFAULT_REPORT_DAYS
from ..core.enums import AttendanceStatus, TimeRange
from ..core.exceptions import ValidationError
from ..students.model import Student
from .model import (
    ClassRate,
    DailyCounts,
    DailyTrend,
    OverallSummary,
    ScheduleDay,
    SessionSummary,
    StudentRate,
    WeekSchedule,
)

PRESENT = AttendanceStatus.PRESENT
ABSENT = AttendanceStatus.ABSENT
LATE = AttendanceStatus.LATE


def percent(part: int, total: int) -> int:
    """Whole-number percentage, half rounded up; 0 for an empty total."""
    if total <= 0:
        return 0
    return int(math.floor(part * 100 / total + 0.5))


def _tally(records: Iterable[AttendanceRecord]) -> Counter:
    counts: Counter = Counter()
    for r in records:
        for entry in r.students:
            counts[entry.status] += 1
    return counts


def filter_by_range(records: Sequence[AttendanceRecord], time_range, today: date) -> list[AttendanceRecord]:
    time_range = TimeRange(time_range)
    if time_range == TimeRange.WEEK:
        cutoff = today - timedelta(days=7)
    elif time_range == TimeRange.MONTH:
        cutoff = one_month_before(today)
    else:
        return list(records)
    # The cutoff day itself is out: "week" is today and the six days before it.
    return [r for r in records if r.date > cutoff]


def weekly_attendance(
    records: Sequence[AttendanceRecord], today: date, *, days: int = DEFAULT_REPORT_DAYS
) -> list[DailyCounts]:
    out: list[DailyCounts] = []
    for day in last_n_days(today, days):
        counts = _tally(r for r in records if r.date == day)
        out.append(
            DailyCounts(
                date=day,
                label=f"{day.strftime('%a, %b')} {day.day}",
                present=counts[PRESENT],
                absent=counts[ABSENT],
                late=counts[LATE],
                total=sum(counts.values()),
            )
        )
    return out


def daily_trend(
    records: Sequence[AttendanceRecord], today: date, *, days: int = DEFAULT_REPORT_DAYS
) -> list[DailyTrend]:
    return [
        DailyTrend(
            date=d.date,
            weekday=d.date.strftime("%a"),
            present=percent(d.present, d.total),
            absent=percent(d.absent, d.total),
            late=percent(d.late, d.total),
        )
        for d in weekly_attendance(records, today, days=days)
    ]


def overall_summary(records: Sequence[AttendanceRecord]) -> OverallSummary:
    counts = _tally(records)
    total = sum(counts.values())
    return OverallSummary(
        present=counts[PRESENT],
        absent=counts[ABSENT],
        late=counts[LATE],
        total=total,
        sessions=len(records),
        present_percentage=percent(counts[PRESENT], total),
        absent_percentage=percent(counts[ABSENT], total),
        late_percentage=percent(counts[LATE], total),
    )


def student_rates(
    students: Sequence[Student], records: Sequence[AttendanceRecord], query: str = ""
) -> list[StudentRate]:
    q = (query or "").strip().lower()
    per_student: dict[int, Counter] = {}
    for r in records:
        for entry in r.students:
            per_student.setdefault(entry.student_id, Counter())[entry.status] += 1

    rates = []
    for s in students:
        if q and q not in s.name.lower() and q not in s.roll_number.lower():
            continue
        counts = per_student.get(s.id, Counter())
        total = sum(counts.values())
        rates.append(
            StudentRate(
                student_id=s.id,
                name=s.name,
                roll_number=s.roll_number,
                present=counts[PRESENT],
                absent=counts[ABSENT],
                late=counts[LATE],
                total=total,
                attendance_percentage=percent(counts[PRESENT], total),
            )
        )
    rates.sort(key=lambda rate: rate.attendance_percentage, reverse=True)
    return rates


def class_rates(records: Sequence[AttendanceRecord]) -> list[ClassRate]:
    by_title: dict[str, list[AttendanceRecord]] = {}
    for r in records:
        by_title.setdefault(r.class_title, []).append(r)

    out = []
    for title, sessions in by_title.items():
        counts = _tally(sessions)
        total = sum(counts.values())
        out.append(
            ClassRate(
                class_title=title,
                present=percent(counts[PRESENT], total),
                absent=percent(counts[ABSENT], total),
                late=percent(counts[LATE], total),
                sessions=len(sessions),
            )
        )
    return out


def session_summary(record: AttendanceRecord) -> SessionSummary:
    total = len(record.students)
    present = record.count(PRESENT)
    return SessionSummary(
        record_id=record.id,
        date=record.date,
        class_title=record.class_title,
        present=present,
        absent=record.count(ABSENT),
        late=record.count(LATE),
        total=total,
        present_percentage=percent(present, total),
    )


def recent_sessions(
    records: Sequence[AttendanceRecord], limit: int = DEFAULT_RECENT_SESSIONS
) -> list[SessionSummary]:
    newest = sorted(records, key=lambda r: r.date, reverse=True)
    return [session_summary(r) for r in newest[:limit]]


def week_schedule(records: Sequence[AttendanceRecord], today: date, week_offset: int = 0) -> WeekSchedule:
    """Sessions laid out Monday to Sunday, with per-day present rates.

    average_attendance is the mean of the daily rates over days that have
    any entries; 0 for an empty week.
    """
    if week_offset > 0:
        raise ValidationError("week_offset cannot point past the current week")

    start = monday_of_week(today, week_offset)
    days: list[ScheduleDay] = []
    for i in range(7):
        day = start + timedelta(days=i)
        sessions = [r for r in records if r.date == day]
        counts = _tally(sessions)
        total = sum(counts.values())
        days.append(
            ScheduleDay(
                date=day,
                weekday=day.strftime("%A"),
                is_today=day == today,
                sessions=[session_summary(r) for r in sessions],
                present=counts[PRESENT],
                total=total,
                percentage=percent(counts[PRESENT], total),
            )
        )

    active = [d for d in days if d.total > 0]
    average = percent(sum(d.percentage for d in active), len(active) * 100)
    end = start + timedelta(days=6)
    return WeekSchedule(
        week_offset=week_offset,
        start=start,
        end=end,
        label=f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}, {end.year}",
        days=days,
        total_sessions=sum(len(d.sessions) for d in days),
        average_attendance=average,
    )
