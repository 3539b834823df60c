from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .fixtures.seed import bootstrap_students
from .reports.service import ReportService
from .storage.facade import PersistenceFacade
from .storage.kv_store import JsonFileStore, KeyValueStore, MemoryStore
from .storage.local import LocalBackend
from .storage.relational import RelationalBackend
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    kv_store: KeyValueStore

    local_backend: LocalBackend
    relational_backend: Optional[RelationalBackend]
    store: PersistenceFacade

    student_service: StudentService
    attendance_service: AttendanceService
    report_service: ReportService


def build_kv_store(local_store_path: Optional[str | Path]) -> KeyValueStore:
    if not local_store_path:
        return MemoryStore()
    return JsonFileStore(local_store_path)


def build_container(
    *,
    db_config: Optional[dict] = None,
    relational_enabled: bool = True,
    local_store_path: Optional[str | Path] = None,
    strict: bool = False,
    seed_on_empty: bool = False,
    kv_store: Optional[KeyValueStore] = None,
) -> Container:
    """Wire the storage stack and the services on top of it.

    Nothing here touches the network: the pool and the schema are created on
    the facade's first call.
    """
    kv = kv_store if kv_store is not None else build_kv_store(local_store_path)
    local_backend = LocalBackend(kv)

    conn: Optional[DatabaseConnection] = None
    relational_backend: Optional[RelationalBackend] = None
    if relational_enabled and db_config is not None:
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
        relational_backend = RelationalBackend(conn)

    store = PersistenceFacade(
        local_backend,
        relational_backend,
        strict=strict,
        seeder=bootstrap_students if seed_on_empty else None,
    )

    return Container(
        conn=conn,
        kv_store=kv,
        local_backend=local_backend,
        relational_backend=relational_backend,
        store=store,
        student_service=StudentService(store),
        attendance_service=AttendanceService(store),
        report_service=ReportService(store),
    )
