from __future__ import annotations

from typing import Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for Student.

    Note (DIP): backends and services depend on this interface, not on a concrete store.
    """

    def list_all(self) -> Sequence[Student]:
        """All students; the relational store orders them by name."""
        raise NotImplementedError

    def create(self, *, name: str, roll_number: str) -> Student:
        raise NotImplementedError

    def update(self, student: Student) -> Student:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        raise NotImplementedError
