from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import (
    AttentrackError,
    AuthenticationFailed,
    BackendError,
    ConnectionRefused,
    ConnectivityError,
    ConstraintViolation,
    UnclassifiedConnectivityError,
    UnknownDatabase,
)
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

AUTH_ERRNOS = frozenset({errorcode.ER_ACCESS_DENIED_ERROR, errorcode.ER_DBACCESS_DENIED_ERROR})
REFUSED_ERRNOS = frozenset(
    {
        errorcode.CR_CONNECTION_ERROR,
        errorcode.CR_CONN_HOST_ERROR,
        errorcode.CR_UNKNOWN_HOST,
        errorcode.CR_SERVER_GONE_ERROR,
        errorcode.CR_SERVER_LOST,
    }
)
CONSTRAINT_ERRNOS = frozenset(
    {
        errorcode.ER_DUP_ENTRY,
        errorcode.ER_ROW_IS_REFERENCED_2,
        errorcode.ER_NO_REFERENCED_ROW_2,
    }
)


def classify_connect_error(err: mysql.connector.Error) -> ConnectivityError:
    """Map a driver error raised while connecting to a named connectivity failure."""
    errno = getattr(err, "errno", None)
    if errno in AUTH_ERRNOS:
        return AuthenticationFailed(str(err))
    if errno in REFUSED_ERRNOS:
        return ConnectionRefused(str(err))
    if errno == errorcode.ER_BAD_DB_ERROR:
        return UnknownDatabase(str(err))
    return UnclassifiedConnectivityError(str(err))


def translate_mysql_error(err: mysql.connector.Error) -> AttentrackError:
    """Map a driver error raised while running statements to the package taxonomy."""
    errno = getattr(err, "errno", None)
    if errno in CONSTRAINT_ERRNOS:
        return ConstraintViolation(getattr(err, "msg", None) or str(err))
    if errno in AUTH_ERRNOS or errno in REFUSED_ERRNOS or errno == errorcode.ER_BAD_DB_ERROR:
        return classify_connect_error(err)
    if isinstance(err, (mysql.connector.errors.InterfaceError, mysql.connector.errors.PoolError)):
        return UnclassifiedConnectivityError(str(err))
    return BackendError(str(err))


def acquire(conn_factory: DatabaseConnection):
    try:
        return conn_factory.connect()
    except mysql.connector.Error as err:
        raise classify_connect_error(err) from err


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Borrow a pooled connection, yield (conn, cursor), commit on success.

    Any driver error rolls the whole unit of work back and is re-raised as a
    package exception. The connection goes back to the pool on every path.
    """
    conn = acquire(conn_factory)
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as err:
        _rollback(conn)
        raise translate_mysql_error(err) from err
    except Exception:
        _rollback(conn)
        raise
    finally:
        conn.close()


def _rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as err:
        # The connection is already broken; the original error is what matters.
        logger.error("Rollback failed: %s", err)


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
