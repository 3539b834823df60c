from __future__ import annotations

from src.attentrack.attentrack.database.connection import DBConfig, DatabaseConnection


def test_config_accepts_camel_case_pool_options():
    config = DBConfig.from_mapping(
        {"host": "h", "user": "u", "password": "p", "database": "d", "connectionLimit": 4, "connectTimeout": 3}
    )

    assert config.connection_limit == 4
    assert config.connect_timeout == 3
    assert config.port == 3306


def test_config_caps_pool_size():
    config = DBConfig.from_mapping({"connection_limit": 500})

    assert config.connection_limit == 32


def test_describe_never_contains_password():
    config = DBConfig.from_mapping({"host": "h", "user": "u", "password": "hunter2", "database": "d"})

    assert config.describe() == "u@h:3306/d"
    assert "hunter2" not in config.describe()


def test_get_instance_is_process_wide():
    DatabaseConnection.reset_instance()
    try:
        first = DatabaseConnection.get_instance(DBConfig.from_mapping({"database": "a"}))
        second = DatabaseConnection.get_instance(DBConfig.from_mapping({"database": "b"}))
        assert first is second
        assert second.config.database == "a"
    finally:
        DatabaseConnection.reset_instance()
