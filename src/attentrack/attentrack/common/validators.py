from __future__ import annotations

from typing import Iterable, Optional

from ..core.exceptions import ValidationError
from ..students.model import Student


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_unique_roll_number(
    roll_number: str,
    students: Iterable[Student],
    *,
    exclude_id: Optional[int] = None,
) -> str:
    """Reject a roll number already used by another student (case-insensitive)."""
    wanted = roll_number.lower()
    for s in students:
        if exclude_id is not None and s.id == exclude_id:
            continue
        if s.roll_number.lower() == wanted:
            raise ValidationError(f"Roll number {roll_number!r} is already assigned to {s.name}")
    return roll_number
