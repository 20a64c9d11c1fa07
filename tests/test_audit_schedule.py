import importlib.util
import json
import logging
from datetime import date
from pathlib import Path

import pytest
import structlog

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "audit_schedule.py"


@pytest.fixture(scope="module")
def audit():
    spec = importlib.util.spec_from_file_location("audit_schedule", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _payload(entry_id: str, start: str, duration: int, **extra) -> dict:
    payload = {
        "id": entry_id,
        "courseId": extra.pop("courseId", "c1"),
        "roomId": "lab-a",
        "modality": "in_person",
        "dayOfWeek": 1,
        "startTime": start,
        "durationMinutes": duration,
        "active": True,
    }
    payload.update(extra)
    return payload


EXPORT = [
    _payload("h1", "08:00", 60, courseName="Algebra", courseCapacity=20, enrolledCount=18),
    _payload("h2", "08:30", 60, courseName="Physics"),
    _payload("h3", "10:00", 60),
    _payload("broken", "10:00", 0),
]


def test_build_report(audit) -> None:
    report = audit.build_report(EXPORT)
    assert report["entries"] == 3
    assert report["skipped"] == 1

    [conflict] = report["conflicts"]
    assert conflict["room_id"] == "lab-a"
    assert conflict["day"] == "Monday"
    assert conflict["first"]["course"] == "Algebra"
    assert conflict["second"]["course"] == "Physics"
    assert conflict["overlap_minutes"] == 30

    tiers = {row["entry_id"]: row["tier"] for row in report["occupancy"]}
    assert tiers == {"h1": "nearly_full", "h2": "unlimited", "h3": "unlimited"}
    assert "week" not in report


def test_build_report_with_week_grid(audit) -> None:
    report = audit.build_report(
        EXPORT, room_id="lab-a", week=date(2026, 3, 4), today=date(2026, 3, 2)
    )
    week = report["week"]
    assert week["week_start"] == "2026-03-02"
    monday = week["columns"][0]
    assert monday["is_today"] is True
    assert [cell["entry_id"] for cell in monday["cells"]] == ["h1", "h2", "h3"]
    assert monday["cells"][0]["top_percent"] == pytest.approx(6.667)


@pytest.fixture
def quiet_logs(audit, monkeypatch):
    # Keep stdout to the report alone
    monkeypatch.setattr(audit, "setup_logging_from_config", lambda *args, **kwargs: None)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    yield
    structlog.reset_defaults()


def test_main_strict_exit_code(audit, quiet_logs, tmp_path, capsys) -> None:
    export = tmp_path / "export.json"
    export.write_text(json.dumps({"success": True, "data": EXPORT}), encoding="utf-8")

    args = audit._parse_args(["--file", str(export), "--strict"])
    assert audit.main(args) == 1
    report = json.loads(capsys.readouterr().out)
    assert len(report["conflicts"]) == 1

    args = audit._parse_args(["--file", str(export), "--table"])
    assert audit.main(args) == 0
    out = capsys.readouterr().out
    assert "Algebra" in out
    assert "nearly_full" in out
