"""Audit an exported branch schedule for room conflicts and occupancy.

Reads a JSON export of schedule entries (camelCase English keys such as
courseId, roomId, dayOfWeek; either a bare list or {"data": [...]}) and
reports every room double-booking, the occupancy tier of each session, and
optionally one room's week grid.

Run with: python scripts/audit_schedule.py --file data/horarios-centro.json
Table:    python scripts/audit_schedule.py --file data/horarios-centro.json --table
Week:     python scripts/audit_schedule.py --file data/horarios-centro.json --room lab-a --week 2026-03-02
Strict:   python scripts/audit_schedule.py --file data/horarios-centro.json --strict

Exit codes:
  0 = success (JSON or table on stdout)
  1 = error (message on stderr), or conflicts found with --strict
"""

import argparse
import json
import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.scheduler.aggregation import load_entries  # noqa: E402
from src.scheduler.conflicts import ConflictPair, find_room_conflicts  # noqa: E402
from src.scheduler.layout import CalendarWindow, WeekGrid, layout_week  # noqa: E402
from src.scheduler.logging import setup_logging_from_config  # noqa: E402
from src.scheduler.models import ScheduleEntry  # noqa: E402
from src.scheduler.occupancy import TIER_LABELS, OccupancySnapshot  # noqa: E402


def _log(msg: str) -> None:
    """Write diagnostic messages to stderr so stdout stays clean for JSON."""
    print(msg, file=sys.stderr)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Audit an exported schedule for room conflicts and occupancy.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--file",
        type=str,
        required=True,
        help="Path to the exported schedule JSON.",
    )
    parser.add_argument(
        "--table",
        action="store_true",
        help="Output human-readable tables instead of JSON.",
    )
    parser.add_argument(
        "--room",
        type=str,
        default=None,
        help="Room id whose week grid should be included.",
    )
    parser.add_argument(
        "--week",
        type=date.fromisoformat,
        default=None,
        help="Any date (YYYY-MM-DD) of the week to lay out (default: this week).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any room conflict is found.",
    )
    return parser.parse_args(argv)


def _load_raw(path: Path) -> list[dict]:
    """Read the export, accepting both a bare list and the API envelope."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("data", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a list of schedule entries")
    return payload


def _conflict_rows(pairs: list[ConflictPair]) -> list[dict]:
    return [
        {
            "room_id": pair.room_id,
            "day": pair.day_of_week.label,
            "first": {
                "entry_id": pair.first.entry_id,
                "course": pair.first.course_name or pair.first.course_id,
                "start": pair.first.start_label,
                "end": pair.first.end_label,
            },
            "second": {
                "entry_id": pair.second.entry_id,
                "course": pair.second.course_name or pair.second.course_id,
                "start": pair.second.start_label,
                "end": pair.second.end_label,
            },
            "overlap_minutes": pair.overlap_minutes,
        }
        for pair in pairs
    ]


def _occupancy_rows(entries: list[ScheduleEntry]) -> list[dict]:
    rows = []
    for entry in sorted(entries, key=lambda e: (e.day_of_week, e.start_time)):
        snapshot = OccupancySnapshot.for_entry(entry)
        rows.append(
            {
                "entry_id": entry.id,
                "course": entry.course_name or entry.course_id,
                "day": entry.day_of_week.label,
                "start": entry.start_label,
                "end": entry.end_label,
                "enrolled": snapshot.enrolled,
                "capacity": snapshot.capacity,
                "seats_left": snapshot.seats_left,
                "tier": snapshot.tier.value,
            }
        )
    return rows


def _week_payload(grid: WeekGrid) -> dict:
    return {
        "room_id": grid.room_id,
        "week_start": grid.week_start.isoformat(),
        "hours": grid.hours,
        "columns": [
            {
                "day": column.day.label,
                "date": column.calendar_date.isoformat(),
                "is_today": column.is_today,
                "cells": [
                    {
                        "entry_id": cell.entry_id,
                        "start": cell.entry.start_label,
                        "end": cell.entry.end_label,
                        "top_percent": round(cell.top_percent, 3),
                        "height_percent": round(cell.height_percent, 3),
                    }
                    for cell in column.cells
                ],
            }
            for column in grid.columns
        ],
    }


def _format_table(headers: list[str], rows: list[list[str]], empty: str) -> str:
    """Format rows as a human-readable table with padded columns."""
    if not rows:
        return empty

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    separator = "-+-".join("-" * w for w in widths)
    row_lines = [
        " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)) for row in rows
    ]
    return "\n".join([header_line, separator, *row_lines])


def _render_tables(report: dict) -> str:
    conflicts = _format_table(
        ["Room", "Day", "Session A", "Session B", "Overlap"],
        [
            [
                c["room_id"],
                c["day"],
                f"{c['first']['start']}-{c['first']['end']} {c['first']['course']}",
                f"{c['second']['start']}-{c['second']['end']} {c['second']['course']}",
                f"{c['overlap_minutes']} min",
            ]
            for c in report["conflicts"]
        ],
        "(no room conflicts)",
    )
    occupancy = _format_table(
        ["Day", "Time", "Course", "Enrolled", "Status"],
        [
            [
                o["day"],
                f"{o['start']}-{o['end']}",
                o["course"],
                f"{o['enrolled']}/{o['capacity']}" if o["capacity"] else str(o["enrolled"]),
                o["tier"],
            ]
            for o in report["occupancy"]
        ],
        "(no sessions)",
    )
    return f"{conflicts}\n\n{occupancy}"


def build_report(
    raw_entries: list[dict],
    *,
    room_id: str | None = None,
    week: date | None = None,
    today: date | None = None,
) -> dict:
    """Run the audit over raw payloads and return a JSON-serializable report."""
    entries = load_entries(raw_entries)
    report: dict = {
        "entries": len(entries),
        "skipped": len(raw_entries) - len(entries),
        "conflicts": _conflict_rows(find_room_conflicts(entries)),
        "occupancy": _occupancy_rows(entries),
        "tier_labels": {tier.value: label for tier, label in TIER_LABELS.items()},
    }
    if room_id:
        grid = layout_week(
            entries,
            room_id,
            week or date.today(),
            CalendarWindow.from_config(),
            today=today,
        )
        report["week"] = _week_payload(grid)
    return report


def main(args: argparse.Namespace) -> int:
    setup_logging_from_config()

    path = Path(args.file)
    _log(f"audit_schedule: reading {path}")
    raw_entries = _load_raw(path)

    report = build_report(raw_entries, room_id=args.room, week=args.week)
    _log(
        f"  {report['entries']} entries ({report['skipped']} skipped), "
        f"{len(report['conflicts'])} room conflicts"
    )

    if args.table:
        print(_render_tables(report))
    else:
        print(json.dumps(report, indent=2, ensure_ascii=False))

    _log("audit_schedule: done")
    if args.strict and report["conflicts"]:
        return 1
    return 0


if __name__ == "__main__":
    args = _parse_args()
    try:
        sys.exit(main(args))
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
