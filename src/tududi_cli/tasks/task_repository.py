# src/tududi_cli/tasks/task_repository.py

"""
Task repository backed by the Tududi REST API.

Each public method is one logical operation: fresh login, one API call.
Reads of the primary task list fail hard; projects and tags are supplementary
and degrade to an empty list.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..api.errors import CreateError, FetchError, ShapeError, UpdateError
from ..api.normalize import (
    Unrecognized,
    normalize,
    normalize_projects,
    normalize_tags,
)
from ..api.session import SessionClient
from .task_dates import to_wire_timestamp
from .task_models import Project, Tag, Task, TaskDraft

logger = logging.getLogger(__name__)

TASKS_PATH = "/api/tasks"
TASKS_QUERY = {"type": "all", "client_side_filtering": "true"}
PROJECTS_PATH = "/api/projects"
TAGS_PATH = "/api/tags"


def _json_or_none(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None


class TaskRepository:
    def __init__(self, session_client: SessionClient) -> None:
        self._sessions = session_client

    @property
    def base_url(self) -> str:
        return self._sessions.base_url

    def task_url(self, task: Task) -> str:
        """Deep link for opening a task in the browser."""
        return f"{self.base_url}/task/{task.uid}"

    # ---- reads ----

    def list_tasks(self) -> list[Task]:
        with self._sessions.open_session() as session:
            try:
                resp = session.request("GET", TASKS_PATH, params=TASKS_QUERY)
            except httpx.HTTPError as e:
                raise FetchError("Failed to fetch tasks.") from e

        if not resp.is_success:
            raise FetchError(
                "Failed to fetch tasks.",
                status_code=resp.status_code,
                status_text=resp.reason_phrase,
            )

        result = normalize(_json_or_none(resp), "tasks")
        if isinstance(result, Unrecognized):
            logger.warning("Unrecognized tasks response: %s", result.reason)
            raise ShapeError("Invalid tasks response.")

        tasks = [Task.from_api(item) for item in result.items if item.get("id") is not None]
        logger.info("Fetched %d tasks (shape=%s)", len(tasks), result.shape)
        return tasks

    def _soft_read(self, path: str, label: str) -> Any:
        """Decoded body, or Unrecognized when the read itself failed."""
        with self._sessions.open_session() as session:
            try:
                resp = session.request("GET", path)
            except httpx.HTTPError as e:
                logger.warning("Fetching %s failed: %s", label, e)
                return Unrecognized(reason=str(e))

        if not resp.is_success:
            logger.warning("Fetching %s failed status=%s", label, resp.status_code)
            return Unrecognized(reason=f"HTTP {resp.status_code}")
        return _json_or_none(resp)

    def list_projects(self) -> list[Project]:
        raw = self._soft_read(PROJECTS_PATH, "projects")
        result = raw if isinstance(raw, Unrecognized) else normalize_projects(raw)
        if isinstance(result, Unrecognized):
            logger.info("No projects available (%s)", result.reason)
            return []
        return [Project.from_api(p) for p in result.items]

    def list_tags(self) -> list[Tag]:
        raw = self._soft_read(TAGS_PATH, "tags")
        result = raw if isinstance(raw, Unrecognized) else normalize_tags(raw)
        if isinstance(result, Unrecognized):
            logger.info("No tags available (%s)", result.reason)
            return []
        return [Tag.from_api(t) for t in result.items]

    # ---- writes ----

    @staticmethod
    def build_update_payload(task: Task, new_status: int) -> dict[str, Any]:
        """
        Whole-record update body: every mutable field is resent as it is, so
        the server does not clobber them; only `status` changes.
        """
        # Fields the server did not send are left out, not nulled.
        payload: dict[str, Any] = {}
        if task.name:
            payload["name"] = task.name
        if task.priority is not None:
            payload["priority"] = task.priority
        if task.due_date is not None:
            payload["due_date"] = to_wire_timestamp(task.due_date)
        elif task.due_raw not in (None, ""):
            payload["due_date"] = task.due_raw
        payload["status"] = int(new_status)
        payload["note"] = task.note or ""
        if task.project_id:
            payload["project_id"] = task.project_id
        if task.tags is not None:
            payload["tags"] = [t.to_api() for t in task.tags]
        return payload

    def update_task_status(self, task: Task, new_status: int) -> None:
        payload = self.build_update_payload(task, new_status)
        with self._sessions.open_session() as session:
            try:
                resp = session.request("PATCH", f"/api/task/{task.id}", json=payload)
            except httpx.HTTPError as e:
                raise UpdateError("Failed to update task.") from e

        if not resp.is_success:
            logger.warning("Task update rejected id=%s status=%s", task.id, resp.status_code)
            raise UpdateError(
                "Failed to update task.",
                status_code=resp.status_code,
                status_text=resp.reason_phrase,
            )
        logger.info("Task id=%s status -> %s", task.id, new_status)

    @staticmethod
    def build_create_payload(draft: TaskDraft, known_tags: list[Tag] | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": draft.name,
            "priority": draft.priority.value,
        }
        if draft.due_date is not None:
            payload["due_date"] = to_wire_timestamp(draft.due_date)
        payload["status"] = int(draft.status)
        payload["note"] = draft.note
        if draft.project_id is not None:
            payload["project_id"] = draft.project_id
        if draft.tags:
            by_name = {t.name.lower(): t for t in known_tags or []}
            refs: list[dict[str, Any]] = []
            for name in draft.tags:
                tag = by_name.get(name.lower())
                refs.append(tag.to_api() if tag else {"name": name})
            payload["tags"] = refs
        return payload

    def create_task(self, draft: TaskDraft, known_tags: list[Tag] | None = None) -> None:
        payload = self.build_create_payload(draft, known_tags)
        with self._sessions.open_session() as session:
            try:
                resp = session.request("POST", "/api/task", json=payload)
            except httpx.HTTPError as e:
                raise CreateError("Failed to create task.") from e

        if not resp.is_success:
            logger.warning("Task creation rejected status=%s", resp.status_code)
            raise CreateError(
                "Failed to create task.",
                status_code=resp.status_code,
                status_text=resp.reason_phrase,
            )
        logger.info("Task created name=%r", draft.name)
