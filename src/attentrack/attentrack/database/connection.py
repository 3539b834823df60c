from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector
from mysql.connector import pooling

from ..core.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_CONNECTION_LIMIT,
    DEFAULT_POOL_NAME,
    MAX_CONNECTION_LIMIT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connection_limit: int = DEFAULT_CONNECTION_LIMIT
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT

    @classmethod
    def from_mapping(cls, db_config: Mapping[str, Any]) -> "DBConfig":
        # Accept both the snake_case settings keys and the camelCase option names.
        limit = db_config.get("connection_limit", db_config.get("connectionLimit", DEFAULT_CONNECTION_LIMIT))
        timeout = db_config.get("connect_timeout", db_config.get("connectTimeout", DEFAULT_CONNECT_TIMEOUT))
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "attentrack")),
            connection_limit=max(1, min(int(limit), MAX_CONNECTION_LIMIT)),
            connect_timeout=int(timeout),
        )

    def describe(self) -> str:
        """user@host:port/database, without the password."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Singleton-like owner of the process-wide MySQL connection pool.

    Note: the pool is created lazily on the first connect() and lives for the
    rest of the process. A pooled connection's close() hands it back to the pool.
    """

    _instance: Optional["DatabaseConnection"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: DBConfig, *, pool_name: str = DEFAULT_POOL_NAME):
        self._config = config
        self._pool_name = pool_name
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = DatabaseConnection(config)
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        with cls._instance_lock:
            cls._instance = None

    @property
    def config(self) -> DBConfig:
        return self._config

    def _ensure_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                # The pool opens connection_limit connections up front, so a bad
                # host, credentials or database surfaces here.
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=self._pool_name,
                    pool_size=self._config.connection_limit,
                    pool_reset_session=True,
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    connection_timeout=self._config.connect_timeout,
                )
                logger.info(
                    "MySQL pool %r ready (size=%d) for %s",
                    self._pool_name,
                    self._config.connection_limit,
                    self._config.describe(),
                )
            return self._pool

    def connect(self):
        return self._ensure_pool().get_connection()

    def connect_server(self):
        """Plain connection without a default database, used to create it."""
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            connection_timeout=self._config.connect_timeout,
        )

    def discard_pool(self) -> None:
        """Forget the pool so the next connect() builds a fresh one."""
        with self._lock:
            self._pool = None
