from __future__ import annotations

import pytest
from mysql.connector import errors

from src.attentrack.attentrack.core.exceptions import (
    AuthenticationFailed,
    ConnectionRefused,
    UnclassifiedConnectivityError,
    UnknownDatabase,
)
from src.attentrack.attentrack.storage.relational import RelationalBackend


def test_initialize_applies_schema(fake_db):
    assert RelationalBackend(fake_db).initialize() is True

    creates = [s for s in fake_db.statements() if s.startswith("CREATE TABLE IF NOT EXISTS")]
    assert len(creates) == 3
    assert fake_db.commits == 1
    assert fake_db.released == 1


def test_initialize_twice_is_harmless(fake_db):
    backend = RelationalBackend(fake_db)

    assert backend.initialize() is True
    assert backend.initialize() is True
    assert fake_db.released == 2


def test_initialize_creates_missing_database_then_reconnects(fake_db):
    fake_db.connect_errors.append(errors.ProgrammingError(msg="Unknown database 'attentrack'", errno=1049))

    assert RelationalBackend(fake_db).initialize() is True

    assert fake_db.statements()[0].startswith("CREATE DATABASE IF NOT EXISTS `attentrack`")
    assert fake_db.server_connects == 1
    assert fake_db.discards == 1
    assert fake_db.acquired == fake_db.released


def test_initialize_missing_database_that_cannot_be_created(fake_db):
    fake_db.connect_errors.append(errors.ProgrammingError(msg="Unknown database 'attentrack'", errno=1049))
    fake_db.server_error = errors.ProgrammingError(msg="Access denied to create", errno=1044)

    with pytest.raises(UnknownDatabase):
        RelationalBackend(fake_db).initialize()


@pytest.mark.parametrize(
    "err, expected",
    [
        (errors.ProgrammingError(msg="Access denied", errno=1045), AuthenticationFailed),
        (errors.InterfaceError(msg="Can't connect", errno=2003), ConnectionRefused),
        (errors.InterfaceError(msg="Something odd"), UnclassifiedConnectivityError),
    ],
)
def test_initialize_propagates_named_connectivity_failures(fake_db, err, expected):
    fake_db.connect_errors.append(err)

    with pytest.raises(expected):
        RelationalBackend(fake_db).initialize()


def test_initialize_reports_schema_failure_as_false(fake_db):
    fake_db.failures.append(
        ("CREATE TABLE IF NOT EXISTS student_attendance", errors.DatabaseError(msg="Cannot add foreign key", errno=1215))
    )

    assert RelationalBackend(fake_db).initialize() is False
    assert fake_db.released == 1


def test_operations_delegate_to_mysql_repositories(fake_db):
    backend = RelationalBackend(fake_db)

    student = backend.add_student("Aarav Sharma", "R001")

    assert student.id == 1
    assert fake_db.statements()[0].startswith("INSERT INTO students")
