from __future__ import annotations

import argparse
import importlib
import logging
import random
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attentrack.attentrack.common.datetime_utils import today_local
from src.attentrack.attentrack.container import build_container
from src.attentrack.attentrack.fixtures.seed import bootstrap_students, sample_attendance


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the sample roll and demo attendance sessions")
    parser.add_argument("--sessions", type=int, default=15)
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible demo data")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        relational_enabled=bool(getattr(settings, "RELATIONAL_ENABLED", True)),
        local_store_path=getattr(settings, "LOCAL_STORE_PATH", None),
    )
    store = container.store

    if not store.get_students():
        for name, roll_number in bootstrap_students():
            store.add_student(name, roll_number)
    students = store.get_students()

    records = sample_attendance(
        students, today=today_local(), rng=random.Random(args.seed), sessions=args.sessions
    )
    for record in records:
        store.save_attendance_record(record)

    print(
        f"OK: Seeded {len(students)} students and {len(records)} sessions "
        f"-> {store.active_backend.value} store"
    )


if __name__ == "__main__":
    main()
