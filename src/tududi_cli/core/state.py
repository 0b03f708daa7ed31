# src/tududi_cli/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.task_filter import TaskFilter
from ..tasks.task_models import Project, Tag, Task, TaskDraft
from .ports import TaskRepo


@dataclass
class AppState:
    """
    Everything one invocation knows. Fetched fresh on start, never persisted.

    `tasks` stays None until the primary list has loaded successfully.
    """

    settings: object
    repo: TaskRepo

    tasks: list[Task] | None = None
    projects: list[Project] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    task_filter: TaskFilter = field(default_factory=TaskFilter)

    loading: bool = False
    error: str | None = None

    # Creation form; None when no form is open.
    draft: TaskDraft | None = None

    def find_task(self, task_id: int) -> Task | None:
        for t in self.tasks or []:
            if t.id == task_id:
                return t
        return None
