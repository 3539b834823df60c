from __future__ import annotations

import random
import time


def generate_attendance_id() -> str:
    """Caller-side id for a new attendance session: epoch millis plus a random suffix."""
    return f"attendance-{int(time.time() * 1000)}-{random.randint(0, 999)}"
