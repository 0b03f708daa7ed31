# src/tududi_cli/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

View-session code depends on this Protocol instead of the HTTP-backed
repository, which keeps tests free of network fakes where they do not need them.
"""

from typing import Protocol

from ..tasks.task_models import Project, Tag, Task, TaskDraft


class TaskRepo(Protocol):
    def task_url(self, task: Task) -> str: ...

    # Reads: tasks fail hard, projects/tags degrade to [].
    def list_tasks(self) -> list[Task]: ...
    def list_projects(self) -> list[Project]: ...
    def list_tags(self) -> list[Tag]: ...

    # Writes: raise on rejection, return nothing on success.
    def update_task_status(self, task: Task, new_status: int) -> None: ...
    def create_task(self, draft: TaskDraft, known_tags: list[Tag] | None = None) -> None: ...
