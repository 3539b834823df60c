from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the class roll.

    Note: plain data object, no storage access here.
    """

    id: int
    name: str
    roll_number: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "rollNumber": self.roll_number}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Student":
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            roll_number=str(data.get("rollNumber", data.get("roll_number", ""))),
        )
