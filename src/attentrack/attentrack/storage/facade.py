"""Single persistence entry point for the rest of the application.

The facade picks a backend once per process: MySQL when it initializes,
the local key/value store otherwise. While MySQL is active, a call that fails
on it is replayed on the local store (unless the facade is strict), so the UI
keeps working at the cost of the two stores drifting apart. `state`,
`active_backend` and `last_served_by` expose what actually happened.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..attendance.model import AttendanceRecord
from ..core.enums import Backend, StoreState
from ..core.exceptions import (
    DomainError,
    InitializationFailed,
    OperationFailed,
    StorageError,
)
from ..students.model import Student
from .base import RelationalStorageBackend, StorageBackend

logger = logging.getLogger(__name__)

Seeder = Callable[[], Iterable[Tuple[str, str]]]


class PersistenceFacade(StorageBackend):
    def __init__(
        self,
        local: StorageBackend,
        relational: Optional[RelationalStorageBackend] = None,
        *,
        strict: bool = False,
        seeder: Optional[Seeder] = None,
    ):
        self._local = local
        self._relational = relational
        self._strict = bool(strict)
        self._seeder = seeder
        self._state = StoreState.UNINITIALIZED
        self._lock = threading.Lock()
        self._last_served_by: Optional[Backend] = None
        self._fallback_count = 0
        self._init_error: Optional[InitializationFailed] = None

    # -------------------------- observability --------------------------
    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def active_backend(self) -> Optional[Backend]:
        if self._state == StoreState.RELATIONAL_ACTIVE:
            return Backend.RELATIONAL
        if self._state == StoreState.LOCAL_FALLBACK:
            return Backend.LOCAL
        return None

    @property
    def last_served_by(self) -> Optional[Backend]:
        return self._last_served_by

    @property
    def fallback_count(self) -> int:
        return self._fallback_count

    @property
    def strict(self) -> bool:
        return self._strict

    # -------------------------- initialization --------------------------
    def initialize(self) -> StoreState:
        """Decide the backend once; later calls return the memoized state.

        In strict mode a failed attempt is memoized too: the same
        InitializationFailed is raised again without retrying the backend.
        """
        if self._state != StoreState.UNINITIALIZED:
            return self._state
        with self._lock:
            if self._init_error is not None:
                raise self._init_error
            if self._state == StoreState.UNINITIALIZED:
                try:
                    self._state = self._select_backend()
                except InitializationFailed as exc:
                    self._init_error = exc
                    raise
        return self._state

    def _select_backend(self) -> StoreState:
        if self._relational is None:
            logger.info("No relational backend configured, using the local store")
            return StoreState.LOCAL_FALLBACK

        try:
            ready = self._relational.initialize()
        except StorageError as exc:
            if self._strict:
                raise InitializationFailed(str(exc)) from exc
            logger.warning("Relational backend unavailable (%s: %s), using the local store", type(exc).__name__, exc)
            return StoreState.LOCAL_FALLBACK

        if not ready:
            if self._strict:
                raise InitializationFailed("relational schema could not be applied")
            logger.warning("Relational backend did not initialize, using the local store")
            return StoreState.LOCAL_FALLBACK

        logger.info("Relational backend active")
        self._seed_if_empty(self._relational)
        return StoreState.RELATIONAL_ACTIVE

    def _seed_if_empty(self, backend: StorageBackend) -> None:
        if self._seeder is None:
            return
        try:
            if backend.get_students():
                return
            added = 0
            for name, roll_number in self._seeder():
                backend.add_student(name, roll_number)
                added += 1
        except (StorageError, DomainError) as exc:
            logger.warning("Seeding the student table failed: %s", exc)
            return
        logger.info("Seeded %d students into the empty student table", added)

    # -------------------------- dispatch --------------------------
    def _run(self, operation: str, call: Callable[[StorageBackend], object]):
        self.initialize()

        if self._state == StoreState.LOCAL_FALLBACK:
            return self._run_local(operation, call, cause=None)

        try:
            result = call(self._relational)
        except DomainError:
            # Constraint violations are the caller's to handle, never diverted.
            raise
        except StorageError as exc:
            if self._strict:
                raise OperationFailed(operation, exc) from exc
            logger.warning("%s failed on the relational backend (%s), retrying on the local store", operation, exc)
            self._fallback_count += 1
            return self._run_local(operation, call, cause=exc)

        self._last_served_by = Backend.RELATIONAL
        return result

    def _run_local(self, operation: str, call: Callable[[StorageBackend], object], *, cause):
        try:
            result = call(self._local)
        except DomainError:
            raise
        except (StorageError, OSError, ValueError) as exc:
            logger.error("%s failed on the local store: %s", operation, exc)
            raise OperationFailed(operation, cause or exc) from exc
        self._last_served_by = Backend.LOCAL
        return result

    # -------------------------- students --------------------------
    def get_students(self) -> Sequence[Student]:
        return self._run("get_students", lambda b: b.get_students())

    def add_student(self, name: str, roll_number: str) -> Student:
        return self._run("add_student", lambda b: b.add_student(name, roll_number))

    def update_student(self, student: Student) -> Student:
        return self._run("update_student", lambda b: b.update_student(student))

    def delete_student(self, student_id: int) -> bool:
        return self._run("delete_student", lambda b: b.delete_student(student_id))

    # -------------------------- attendance --------------------------
    def get_attendance_records(self) -> Sequence[AttendanceRecord]:
        return self._run("get_attendance_records", lambda b: b.get_attendance_records())

    def save_attendance_record(self, record: AttendanceRecord) -> AttendanceRecord:
        return self._run("save_attendance_record", lambda b: b.save_attendance_record(record))

    def delete_attendance_record(self, record_id: str) -> bool:
        return self._run("delete_attendance_record", lambda b: b.delete_attendance_record(record_id))
