"""Back up the attendance data.

Note: uses `mysqldump` for the relational store when it is installed, and
always writes a JSON export of what the storage layer currently serves.
"""

from __future__ import annotations

import importlib
import json
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attentrack.attentrack.container import build_container


def dump_mysql(db: dict, out_file: Path) -> bool:
    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
        f"-p{db['password']}",
        db["database"],
    ]
    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
    except FileNotFoundError:
        out_file.unlink(missing_ok=True)
        print("SKIP: `mysqldump` not found, relational dump skipped")
        return False
    except subprocess.CalledProcessError as exc:
        out_file.unlink(missing_ok=True)
        print(f"SKIP: mysqldump failed: {exc.stderr.decode(errors='replace').strip()}")
        return False
    return True


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db = dict(settings.DB_CONFIG)

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")

    container = build_container(
        db_config=db,
        relational_enabled=bool(getattr(settings, "RELATIONAL_ENABLED", True)),
        local_store_path=getattr(settings, "LOCAL_STORE_PATH", None),
    )
    store = container.store
    export = {
        "exported_at": datetime.now().isoformat(timespec="seconds"),
        "students": [s.to_dict() for s in store.get_students()],
        "attendance": [r.to_dict() for r in store.get_attendance_records()],
    }
    json_file = out_dir / f"attentrack_{ts}.json"
    json_file.write_text(json.dumps(export, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK: JSON export from the {store.active_backend.value} store: {json_file}")

    sql_file = out_dir / f"attentrack_{ts}.sql"
    if dump_mysql(db, sql_file):
        print(f"OK: Backup created: {sql_file}")


if __name__ == "__main__":
    main()
