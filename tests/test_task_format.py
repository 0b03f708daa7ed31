# tests/test_task_format.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tududi_cli.tasks.task_dates import parse_timestamp, to_display_date, to_wire_timestamp
from tududi_cli.tasks.task_format import format_task_detail, format_task_row
from tududi_cli.tasks.task_models import Project, Tag, Task, priority_label, status_label

PROJECTS = [Project(id=3, uid="p3", name="Home")]


def test_status_labels() -> None:
    assert [status_label(s) for s in range(5)] == ["Not Started", "In Progress", "Done", "Archived", "Waiting"]
    assert status_label(9) == "Unknown"
    assert status_label(None) == "Unknown"


def test_numeric_priority_label() -> None:
    assert priority_label(2) == "high"
    assert priority_label("low") == "low"


def test_wire_timestamp_is_utc_with_milliseconds() -> None:
    dt = datetime(2026, 10, 20, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_wire_timestamp(dt) == "2026-10-20T10:00:00.000Z"


def test_parse_timestamp_variants() -> None:
    assert parse_timestamp("2026-10-20") == datetime(2026, 10, 20, tzinfo=timezone.utc)
    assert parse_timestamp("2026-10-20T08:15:00.000Z") == datetime(2026, 10, 20, 8, 15, tzinfo=timezone.utc)
    assert parse_timestamp("not a date") is None
    assert parse_timestamp(None) is None
    naive_local = parse_timestamp("2026-10-20T08:15:00")
    assert naive_local is not None and naive_local.tzinfo is not None


def test_unknown_status_survives_decoding() -> None:
    task = Task.from_api({"id": 1, "name": "x", "status": 12})
    assert task.status == 12
    assert task.status_text == "Unknown"


def test_row_shows_project_and_due_date() -> None:
    due = datetime(2026, 10, 20, 12, tzinfo=timezone.utc)
    task = Task(id=4, uid="u", name="Rake", status=2, priority="low", due_date=due, project_id=3)
    row = format_task_row(task, PROJECTS)
    assert row.startswith("[x] #4 Rake")
    assert "Done" in row and "low" in row and "📁 Home" in row
    assert to_display_date(due) in row


def test_row_without_resolvable_project() -> None:
    task = Task(id=4, uid="u", name="Rake", status=0, priority="low", project_id=99)
    assert "📁" not in format_task_row(task, PROJECTS)


def test_detail_markdown() -> None:
    task = Task(
        id=1,
        uid="u",
        name="Rake",
        status=1,
        priority="low",
        project_id=3,
        tags=[Tag(uid="t", name="garden"), Tag(uid="t2", name="weekend")],
    )
    md = format_task_detail(task, PROJECTS)
    assert md.splitlines()[0] == "# Rake"
    assert "**Status:** In Progress" in md
    assert "📁 Home | 🏷️ garden, weekend" in md
    assert md.endswith("No notes available.")


def test_detail_without_project_or_tags() -> None:
    md = format_task_detail(Task(id=1, uid="u", name="Rake", status=0, priority="low", note="hi"), [])
    assert "📁" not in md and "🏷️" not in md
    assert md.endswith("hi")


def test_null_tag_name_is_not_rendered_as_text() -> None:
    task = Task.from_api({"id": 1, "name": "x", "status": 0, "tags": [{"uid": "t", "name": None}]})
    assert task.tag_names == [""]
    assert "None" not in format_task_detail(task, [])


def test_non_string_note_is_coerced() -> None:
    task = Task.from_api({"id": 1, "name": "x", "status": 0, "priority": "low", "note": 42})
    assert task.note == "42"
    assert "x - 42" in format_task_row(task, [])
