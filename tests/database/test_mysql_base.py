from __future__ import annotations

import pytest
from mysql.connector import errors

from src.attentrack.attentrack.core.exceptions import (
    AuthenticationFailed,
    BackendError,
    ConnectionRefused,
    ConstraintViolation,
    UnclassifiedConnectivityError,
    UnknownDatabase,
)
from src.attentrack.attentrack.database.mysql_base import (
    classify_connect_error,
    db_cursor,
    translate_mysql_error,
)


@pytest.mark.parametrize(
    "err, expected",
    [
        (errors.ProgrammingError(msg="Access denied for user 'root'", errno=1045), AuthenticationFailed),
        (errors.DatabaseError(msg="Can't connect to MySQL server", errno=2003), ConnectionRefused),
        (errors.InterfaceError(msg="Unknown MySQL server host", errno=2005), ConnectionRefused),
        (errors.ProgrammingError(msg="Unknown database 'attentrack'", errno=1049), UnknownDatabase),
        (errors.PoolError(msg="Failed getting connection; pool exhausted"), UnclassifiedConnectivityError),
    ],
)
def test_classify_connect_error(err, expected):
    assert isinstance(classify_connect_error(err), expected)


def test_translate_duplicate_key_is_constraint_violation():
    err = errors.IntegrityError(msg="Duplicate entry 'R001' for key 'rollNumber'", errno=1062)
    assert isinstance(translate_mysql_error(err), ConstraintViolation)


def test_translate_missing_foreign_row_is_constraint_violation():
    err = errors.IntegrityError(msg="Cannot add or update a child row", errno=1452)
    assert isinstance(translate_mysql_error(err), ConstraintViolation)


def test_translate_lost_connection_is_connectivity():
    err = errors.OperationalError(msg="Lost connection to MySQL server during query", errno=2013)
    assert isinstance(translate_mysql_error(err), ConnectionRefused)


def test_translate_other_errors_are_backend_errors():
    err = errors.ProgrammingError(msg="You have an error in your SQL syntax", errno=1064)
    assert isinstance(translate_mysql_error(err), BackendError)


def test_db_cursor_commits_and_releases(fake_db):
    with db_cursor(fake_db) as (_, cur):
        cur.execute("SELECT 1")

    assert fake_db.commits == 1
    assert fake_db.rollbacks == 0
    assert fake_db.released == 1
    assert fake_db.cursors_closed == 1


def test_db_cursor_rolls_back_and_translates(fake_db):
    fake_db.failures.append(("INSERT", errors.IntegrityError(msg="Duplicate entry", errno=1062)))

    with pytest.raises(ConstraintViolation) as excinfo:
        with db_cursor(fake_db) as (_, cur):
            cur.execute("INSERT INTO students(name, rollNumber) VALUES(%s,%s)", ("A", "R001"))

    assert isinstance(excinfo.value.__cause__, errors.IntegrityError)
    assert fake_db.commits == 0
    assert fake_db.rollbacks == 1
    assert fake_db.released == 1


def test_db_cursor_releases_on_non_driver_errors(fake_db):
    with pytest.raises(KeyError):
        with db_cursor(fake_db) as (_, cur):
            cur.execute("SELECT 1")
            raise KeyError("boom")

    assert fake_db.rollbacks == 1
    assert fake_db.released == 1


def test_db_cursor_classifies_acquire_failure(fake_db):
    fake_db.connect_errors.append(errors.ProgrammingError(msg="Access denied", errno=1045))

    with pytest.raises(AuthenticationFailed):
        with db_cursor(fake_db):
            pass

    assert fake_db.released == 0
