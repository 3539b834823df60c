from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Per-student outcome of one class session."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class StoreState(str, Enum):
    """Lifecycle of the persistence facade within one process."""

    UNINITIALIZED = "UNINITIALIZED"
    RELATIONAL_ACTIVE = "RELATIONAL_ACTIVE"
    LOCAL_FALLBACK = "LOCAL_FALLBACK"


class Backend(str, Enum):
    """Which store actually served a call."""

    RELATIONAL = "relational"
    LOCAL = "local"


class TimeRange(str, Enum):
    WEEK = "week"
    MONTH = "month"
    ALL = "all"
