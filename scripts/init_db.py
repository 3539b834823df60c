from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attentrack.attentrack.core.exceptions import ConnectivityError
from src.attentrack.attentrack.database.bootstrap import list_tables
from src.attentrack.attentrack.database.connection import DBConfig, DatabaseConnection
from src.attentrack.attentrack.storage.relational import RelationalBackend


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    config = DBConfig.from_mapping(settings.DB_CONFIG)
    conn = DatabaseConnection(config)
    try:
        ready = RelationalBackend(conn).initialize()
    except ConnectivityError as exc:
        raise SystemExit(f"FAILED ({type(exc).__name__}): {exc}") from exc
    if not ready:
        raise SystemExit(f"FAILED: schema could not be applied to {config.describe()}")

    tables = list_tables(conn)
    print(f"OK: Applied schema.sql -> {config.describe()} (tables={len(tables)}: {', '.join(sorted(tables))})")


if __name__ == "__main__":
    main()
