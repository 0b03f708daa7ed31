# src/tududi_cli/tasks/task_api.py

"""
View-session operations used by the console commands.

Remote mutations are applied to the in-memory collection only after the
repository has confirmed them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from ..api.errors import CreateError, TududiError, UpdateError, friendly_error_message
from ..core.state import AppState
from .task_dates import parse_user_date
from .task_filter import NO_PROJECT
from .task_format import find_project_name
from .task_models import Priority, Task, TaskDraft, TaskStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Notice:
    """Transient notification (toast)."""

    title: str
    message: str | None = None
    style: Literal["success", "failure"] = "success"

    @property
    def ok(self) -> bool:
        return self.style == "success"

    def __str__(self) -> str:
        mark = "OK" if self.ok else "!!"
        return f"[{mark}] {self.title}" + (f": {self.message}" if self.message else "")


def _failure(title: str, err: TududiError) -> Notice:
    # Rejections show the server status text; anything else the error itself.
    if isinstance(err, (UpdateError, CreateError)) and err.status_text:
        return Notice(title=title, message=err.status_text, style="failure")
    return Notice(title=title, message=friendly_error_message(err), style="failure")


# ---- loading ----


def load_task_view(state: AppState) -> bool:
    """
    Fetch projects (optional) then tasks (required), one after the other.

    On failure `state.error` is set and `state.tasks` is left untouched.
    """
    state.loading = True
    state.error = None
    try:
        projects = state.repo.list_projects()
        tasks = state.repo.list_tasks()
    except TududiError as e:
        state.error = friendly_error_message(e)
        logger.warning("Loading tasks failed: %s", state.error)
        return False
    finally:
        state.loading = False

    state.projects = projects
    state.tasks = tasks
    logger.info("Task view loaded: %d tasks, %d projects", len(tasks), len(projects))
    return True


def set_filter(state: AppState, value: str) -> bool:
    return state.task_filter.select(value)


def visible_tasks(state: AppState) -> list[Task]:
    return state.task_filter.apply(state.tasks or [])


def project_name_for(state: AppState, task: Task) -> str | None:
    return find_project_name(task, state.projects)


# ---- status changes ----


def apply_confirmed_status(state: AppState, task_id: int, new_status: int) -> None:
    """Reflect a server-confirmed status change in the local collection."""
    if state.tasks is None:
        return
    for t in state.tasks:
        if t.id == task_id:
            t.status = new_status


def change_task_status(state: AppState, task_id: int, new_status: int) -> Notice:
    task = state.find_task(task_id)
    if task is None:
        return Notice(title="Task not found", message=f"#{task_id}", style="failure")

    try:
        target = TaskStatus(new_status)
    except ValueError:
        return Notice(title="Invalid status", message=str(new_status), style="failure")

    try:
        state.repo.update_task_status(task, int(target))
    except TududiError as e:
        return _failure("Failed to update task", e)

    apply_confirmed_status(state, task_id, int(target))
    return Notice(title=f"Task marked as {target.past_tense}")


def toggle_completion(state: AppState, task_id: int) -> Notice:
    """Done tasks go back to not started; anything else becomes done."""
    task = state.find_task(task_id)
    if task is None:
        return Notice(title="Task not found", message=f"#{task_id}", style="failure")
    new_status = TaskStatus.NOT_STARTED if task.is_done else TaskStatus.DONE
    return change_task_status(state, task_id, new_status)


# ---- creation form ----

DRAFT_FIELDS = ("name", "priority", "due", "status", "note", "project", "tags")


def new_draft(state: AppState, name: str = "") -> TaskDraft:
    """
    Open the creation form. Tags (and projects, if the list was never loaded)
    are fetched for the pickers; failing to get them leaves the pickers empty.
    """
    try:
        state.tags = state.repo.list_tags()
        if not state.projects:
            state.projects = state.repo.list_projects()
    except TududiError as e:
        logger.warning("Task form opened without tags/projects: %s", friendly_error_message(e))
    state.draft = TaskDraft(name=name)
    return state.draft


def set_draft_field(state: AppState, field_name: str, value: str) -> None:
    """Set one form field from text input. Raises ValueError on bad input."""
    draft = state.draft if state.draft is not None else new_draft(state)
    key = field_name.strip().lower()
    value = value.strip()

    if key == "name":
        draft.name = value
    elif key == "priority":
        draft.priority = Priority.parse(value)
    elif key in ("due", "due_date"):
        draft.due_date = parse_user_date(value) if value else None
    elif key == "status":
        draft.status = TaskStatus(int(value))
    elif key == "note":
        draft.note = value
    elif key == "project":
        draft.project_id = _resolve_project_id(state, value)
    elif key == "tags":
        draft.tags = [t.strip() for t in value.split(",") if t.strip()]
    else:
        raise ValueError(f"Unknown field {field_name!r}. Fields: {', '.join(DRAFT_FIELDS)}")


def _resolve_project_id(state: AppState, value: str) -> int | None:
    if not value or value.lower() in ("none", NO_PROJECT):
        return None
    if value.isdigit():
        return int(value)
    for p in state.projects:
        if p.name.lower() == value.lower():
            return p.id
    raise ValueError(f"Unknown project {value!r}")


def submit_draft(state: AppState) -> Notice:
    draft = state.draft
    if draft is None:
        return Notice(title="No task form open", message="Use /new first.", style="failure")
    if not draft.name.strip():
        return Notice(title="Name is required", style="failure")

    try:
        state.repo.create_task(draft, state.tags)
    except TududiError as e:
        return _failure("Failed to create task", e)

    state.draft = None
    return Notice(title="Task created successfully")
