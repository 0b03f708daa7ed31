# src/tududi_cli/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import webbrowser
from collections.abc import Callable
from typing import cast

from ..api.errors import TududiError, friendly_error_message
from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_dates import to_display_date
from ..tasks.task_filter import filter_options
from ..tasks.task_format import format_task_detail, format_task_row
from ..tasks.task_models import TaskStatus

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_task_id(args: list[str], usage: str) -> int | str:
    """Task id from args[0] (accepts "#12"), or a usage message."""
    if not args:
        return usage
    raw = args[0].lstrip("#")
    if not raw.isdigit():
        return f"Not a task id: {args[0]}\n{usage}"
    return int(raw)


def _render_list(state: AppState) -> str:
    if state.error:
        return f"Error loading tasks: {state.error}"
    if state.tasks is None:
        return "Tasks are not loaded. Use /reload."

    shown = task_api.visible_tasks(state)
    header = f"Tasks ({len(shown)} of {len(state.tasks)}, filter: {state.task_filter.value})"
    if not shown:
        return f"{header}\n  (no tasks)"
    rows = [f"  {format_task_row(t, state.projects)}" for t in shown]
    return "\n".join([header, *rows])


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_reload(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("Loading tasks...")
    task_api.load_task_view(state)
    return _render_list(state)


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list            -> tasks matching the current filter
    /list status-0   -> switch filter, then list
    """
    if args and not task_api.set_filter(state, args[0]):
        return f"Unknown filter value: {args[0]}. Use /filter to see the options."
    return _render_list(state)


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter          -> show the dropdown options (current one marked)
    /filter <value>  -> select a value
    """
    if args:
        if not task_api.set_filter(state, args[0]):
            return f"Unknown filter value: {args[0]}."
        return f"Filter: {state.task_filter.value}"

    current = state.task_filter.value
    lines = ["Filter Tasks:"]
    for section, items in filter_options(state.projects):
        lines.append(f"  {section}")
        for title, value in items:
            mark = "*" if value == current else " "
            lines.append(f"   {mark} {value:<24} {title}")
    return "\n".join(lines)


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args, "Usage: /show <id>")
    if isinstance(task_id, str):
        return task_id
    task = state.find_task(task_id)
    if task is None:
        return f"No task #{task_id}."
    action = "Mark as Not Started" if task.is_done else "Complete Task"
    return (
        f"{format_task_detail(task, state.projects)}\n\n"
        f"/done {task.id} - {action}\n"
        f"/open {task.id} - {state.repo.task_url(task)}"
    )


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args, "Usage: /done <id>")
    if isinstance(task_id, str):
        return task_id
    return str(task_api.toggle_completion(state, task_id))


def cmd_status(state: AppState, args: list[str]) -> str:
    usage = "Usage: /status <id> <0-4> (" + ", ".join(f"{int(s)}={s.label}" for s in TaskStatus) + ")"
    task_id = _parse_task_id(args, usage)
    if isinstance(task_id, str):
        return task_id
    if len(args) < 2 or not args[1].isdigit():
        return usage
    return str(task_api.change_task_status(state, task_id, int(args[1])))


def cmd_open(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args, "Usage: /open <id>")
    if isinstance(task_id, str):
        return task_id
    task = state.find_task(task_id)
    if task is None:
        return f"No task #{task_id}."
    url = state.repo.task_url(task)
    try:
        webbrowser.open(url)
    except webbrowser.Error:
        logger.debug("Browser open failed url=%s", url, exc_info=True)
    return url


def cmd_projects(state: AppState, args: list[str]) -> str:
    if not state.projects:
        return "No projects."
    return "\n".join(["Projects:", *(f"  {p.id}: {p.name}" for p in state.projects)])


def cmd_tags(state: AppState, args: list[str]) -> str:
    try:
        state.tags = state.repo.list_tags()
    except TududiError as e:
        return f"Error loading tags: {friendly_error_message(e)}"
    if not state.tags:
        return "No tags."
    return "Tags: " + ", ".join(t.name for t in state.tags)


# ---- creation form ----


def _render_draft(state: AppState) -> str:
    d = state.draft
    if d is None:
        return "No task form open. Use /new [name]."
    project = "-"
    if d.project_id is not None:
        name = next((p.name for p in state.projects if p.id == d.project_id), None)
        project = f"{d.project_id} ({name})" if name else str(d.project_id)
    return (
        "New task:\n"
        f"  name:     {d.name or '-'}\n"
        f"  priority: {d.priority.value}\n"
        f"  due:      {to_display_date(d.due_date) if d.due_date else '-'}\n"
        f"  status:   {d.status.label}\n"
        f"  note:     {d.note or '-'}\n"
        f"  project:  {project}\n"
        f"  tags:     {', '.join(d.tags) or '-'}\n"
        "Use /set <field> <value>, then /submit."
    )


def cmd_new(state: AppState, args: list[str]) -> str:
    task_api.new_draft(state, " ".join(args))
    return _render_draft(state)


def cmd_set(state: AppState, args: list[str]) -> str:
    """
    /set name Buy milk
    /set priority high
    /set due 2026-10-20     (empty value clears it)
    /set status 1
    /set note Two bottles
    /set project Home       (name or id; "none" clears it)
    /set tags errands,home
    """
    if not args:
        return "Usage: /set <field> <value>. Fields: " + ", ".join(task_api.DRAFT_FIELDS)
    try:
        task_api.set_draft_field(state, args[0], " ".join(args[1:]))
    except ValueError as e:
        return f"Invalid value: {e}"
    return _render_draft(state)


def cmd_draft(state: AppState, args: list[str]) -> str:
    return _render_draft(state)


def cmd_submit(state: AppState, args: list[str]) -> str:
    return str(task_api.submit_draft(state))


def cmd_cancel(state: AppState, args: list[str]) -> str:
    state.draft = None
    return "Task form discarded."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List tasks: /list [filter-value].", aliases=["ls"])
registry.register("filter", cmd_filter, help_text="Show or set the filter: /filter [status-N|project-ID].")
registry.register("show", cmd_show, help_text="Task details: /show <id>.")
registry.register("done", cmd_done, help_text="Complete a task (or reopen a done one): /done <id>.")
registry.register("status", cmd_status, help_text="Set a task status: /status <id> <0-4>.")
registry.register("open", cmd_open, help_text="Open a task in the browser: /open <id>.")
registry.register("projects", cmd_projects, help_text="List projects.")
registry.register("tags", cmd_tags, help_text="List tags.")
registry.register("reload", cmd_reload, help_text="Fetch projects and tasks again.", aliases=["r"])
registry.register("new", cmd_new, help_text="Start a new task form: /new [name].")
registry.register("set", cmd_set, help_text="Set a form field: /set <field> <value>.")
registry.register("draft", cmd_draft, help_text="Show the task form.")
registry.register("submit", cmd_submit, help_text="Create the task from the form.")
registry.register("cancel", cmd_cancel, help_text="Discard the task form.")
