# src/tududi_cli/tasks/task_format.py

from __future__ import annotations

from collections.abc import Iterable

from .task_dates import to_display_date
from .task_models import Project, Task, priority_label


def find_project_name(task: Task, projects: Iterable[Project]) -> str | None:
    if not task.project_id:
        return None
    for p in projects:
        if p.id == task.project_id:
            return p.name
    return None


def format_task_row(task: Task, projects: Iterable[Project]) -> str:
    """One list line: icon, id, name, then accessories."""
    icon = "[x]" if task.is_done else "[ ]"
    accessories = [task.status_text, priority_label(task.priority)]
    project_name = find_project_name(task, projects)
    if project_name:
        accessories.append(f"📁 {project_name}")
    if task.due_date is not None:
        accessories.append(to_display_date(task.due_date))

    line = f"{icon} #{task.id} {task.name}"
    if task.note:
        line += f" - {task.note.splitlines()[0]}"
    return f"{line}  ({' | '.join(a for a in accessories if a)})"


def format_task_detail(task: Task, projects: Iterable[Project]) -> str:
    """Markdown detail view."""
    lines = [f"# {task.name}", "", f"**Status:** {task.status_text}"]
    if task.due_date is not None:
        lines[-1] += "  "
        lines.append(f"**Due Date:** {to_display_date(task.due_date)}")
    lines.append("")

    project_name = find_project_name(task, projects)
    tags_text = ", ".join(task.tag_names) or None
    meta = []
    if project_name:
        meta.append(f"📁 {project_name}")
    if tags_text:
        meta.append(f"🏷️ {tags_text}")
    if meta:
        lines.extend([" | ".join(meta), ""])

    lines.append(task.note or "No notes available.")
    return "\n".join(lines)
