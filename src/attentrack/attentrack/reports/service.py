from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import today_local
from ..core.enums import TimeRange
from ..storage.base import StorageBackend
from .aggregations import (
    class_rates,
    daily_trend,
    filter_by_range,
    overall_summary,
    recent_sessions,
    student_rates,
    week_schedule,
    weekly_attendance,
)
from .model import Dashboard, WeekSchedule


class ReportService:
    """Fetches a fresh snapshot through the store and builds the report views."""

    def __init__(self, store: StorageBackend, *, today: Callable[[], date] = today_local):
        self._store = store
        self._today = today

    def build_dashboard(
        self,
        *,
        time_range: TimeRange | str = TimeRange.WEEK,
        query: str = "",
        today: Optional[date] = None,
    ) -> Dashboard:
        today = today or self._today()
        time_range = TimeRange(time_range)

        records = list(self._store.get_attendance_records())
        students = list(self._store.get_students())
        in_range = filter_by_range(records, time_range, today)

        return Dashboard(
            time_range=time_range.value,
            today=today,
            # The weekly chart and trend always cover the last seven days of the range.
            weekly=weekly_attendance(in_range, today),
            trend=daily_trend(in_range, today),
            overall=overall_summary(in_range),
            classes=class_rates(in_range),
            students=student_rates(students, in_range, query),
            recent=recent_sessions(in_range),
        )

    def week_schedule(self, *, week_offset: int = 0, today: Optional[date] = None) -> WeekSchedule:
        today = today or self._today()
        return week_schedule(list(self._store.get_attendance_records()), today, week_offset)
