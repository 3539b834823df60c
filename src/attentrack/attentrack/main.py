from __future__ import annotations

import argparse
import importlib
import logging
from types import ModuleType
from typing import Optional, Sequence

from dotenv import load_dotenv

from .container import Container, build_container
from .core.enums import TimeRange
from .reports.model import Dashboard, WeekSchedule

logger = logging.getLogger(__name__)


def load_settings() -> ModuleType:
    load_dotenv(override=False)
    # Imported lazily: the settings package sits at the repository root.
    from config import get_settings_module

    return importlib.import_module(get_settings_module())


def configure_logging(settings: ModuleType) -> None:
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_container(settings: Optional[ModuleType] = None) -> Container:
    settings = settings or load_settings()
    db_config = dict(getattr(settings, "DB_CONFIG"))
    return build_container(
        db_config=db_config,
        relational_enabled=bool(getattr(settings, "RELATIONAL_ENABLED", True)),
        local_store_path=getattr(settings, "LOCAL_STORE_PATH", None),
        strict=bool(getattr(settings, "STRICT_STORAGE", False)),
        seed_on_empty=bool(getattr(settings, "SEED_ON_EMPTY", False)),
    )


def render_dashboard(dashboard: Dashboard) -> str:
    lines = [f"Attendance ({dashboard.time_range}, as of {dashboard.today.isoformat()})"]
    o = dashboard.overall
    if o is not None:
        lines.append(
            f"  sessions={o.sessions} present={o.present_percentage}% "
            f"absent={o.absent_percentage}% late={o.late_percentage}% ({o.present}/{o.total})"
        )
    lines.append("Last 7 days:")
    for d in dashboard.weekly:
        lines.append(f"  {d.label:<12} present={d.present:<3} absent={d.absent:<3} late={d.late:<3} total={d.total}")
    if dashboard.classes:
        lines.append("By class:")
        for c in dashboard.classes:
            lines.append(f"  {c.class_title:<24} present={c.present}% absent={c.absent}% late={c.late}%")
    if dashboard.students:
        lines.append("By student:")
        for s in dashboard.students:
            lines.append(f"  {s.roll_number:<6} {s.name:<24} {s.attendance_percentage:>3}% ({s.present}/{s.total})")
    return "\n".join(lines)


def render_week_schedule(schedule: WeekSchedule) -> str:
    lines = [
        f"Week of {schedule.label}: sessions={schedule.total_sessions} "
        f"average attendance={schedule.average_attendance}%"
    ]
    for d in schedule.days:
        marker = "*" if d.is_today else " "
        lines.append(f"{marker} {d.weekday:<10} {d.date.isoformat()}  {d.percentage:>3}% ({d.present}/{d.total})")
        for s in d.sessions:
            lines.append(f"    {s.class_title:<24} {s.present}/{s.total} present ({s.present_percentage}%)")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="attentrack", description="Classroom attendance summary")
    parser.add_argument("--range", dest="time_range", choices=[t.value for t in TimeRange], default="week")
    parser.add_argument("--query", default="", help="filter students by name or roll number")
    parser.add_argument("--init-only", action="store_true", help="initialize the store and exit")
    parser.add_argument(
        "--week", type=int, default=None, metavar="OFFSET", help="show the week schedule, 0 = this week, -1 = last week"
    )
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings)
    container = create_container(settings)

    state = container.store.initialize()
    print(f"[attentrack] storage={state.value} backend={container.store.active_backend.value}")
    if args.init_only:
        return 0

    if args.week is not None:
        print(render_week_schedule(container.report_service.week_schedule(week_offset=args.week)))
        return 0

    dashboard = container.report_service.build_dashboard(time_range=args.time_range, query=args.query)
    print(render_dashboard(dashboard))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
