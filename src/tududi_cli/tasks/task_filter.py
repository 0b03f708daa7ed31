# src/tududi_cli/tasks/task_filter.py

"""
Filter engine for the task list.

The list has one dropdown that filters either by status or by project, never
both. Its value is a single string tagged with the facet it belongs to:

    status-all, status-0 .. status-4
    project-, project-no-project, project-<id>

Selecting a value replaces the whole active facet, so setting one facet
always clears the other.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from .task_models import Project, Task, TaskStatus

logger = logging.getLogger(__name__)

STATUS_PREFIX: Final = "status-"
PROJECT_PREFIX: Final = "project-"
ALL: Final = "all"
NO_PROJECT: Final = "no-project"


@dataclass(frozen=True, slots=True)
class StatusFacet:
    status: str = ALL  # "all" or the status number as text


@dataclass(frozen=True, slots=True)
class ProjectFacet:
    project: str = ""  # "" (all projects), "no-project" or a project id as text


FilterValue = StatusFacet | ProjectFacet


def decode_filter_value(value: str) -> FilterValue | None:
    """Parse a dropdown value. Unknown prefixes yield None."""
    if value.startswith(STATUS_PREFIX):
        return StatusFacet(value[len(STATUS_PREFIX) :] or ALL)
    if value.startswith(PROJECT_PREFIX):
        return ProjectFacet(value[len(PROJECT_PREFIX) :])
    return None


def encode_filter_value(facet: FilterValue) -> str:
    if isinstance(facet, StatusFacet):
        return f"{STATUS_PREFIX}{facet.status}"
    # "All projects" restricts nothing and shows as the status default.
    if not facet.project:
        return f"{STATUS_PREFIX}{ALL}"
    return f"{PROJECT_PREFIX}{facet.project}"


def task_matches(task: Task, status_filter: str, project_filter: str) -> bool:
    status_match = status_filter == ALL or str(task.status) == status_filter
    if not project_filter:
        project_match = True
    elif project_filter == NO_PROJECT:
        project_match = not task.project_id
    else:
        project_match = task.project_id is not None and str(task.project_id) == project_filter
    return status_match and project_match


class TaskFilter:
    """Current dropdown state. Only one facet is ever active."""

    def __init__(self, active: FilterValue | None = None) -> None:
        self.active: FilterValue = active or StatusFacet()

    @property
    def status_filter(self) -> str:
        return self.active.status if isinstance(self.active, StatusFacet) else ALL

    @property
    def project_filter(self) -> str:
        return self.active.project if isinstance(self.active, ProjectFacet) else ""

    @property
    def value(self) -> str:
        return encode_filter_value(self.active)

    def select(self, value: str) -> bool:
        """Apply a dropdown value. Returns False (and changes nothing) if unknown."""
        facet = decode_filter_value(value)
        if facet is None:
            logger.debug("Ignoring unknown filter value %r", value)
            return False
        self.active = facet
        return True

    def apply(self, tasks: Iterable[Task]) -> list[Task]:
        """Visible subset, in the order of `tasks`."""
        status_filter = self.status_filter
        project_filter = self.project_filter
        return [t for t in tasks if task_matches(t, status_filter, project_filter)]


def filter_options(projects: Iterable[Project]) -> list[tuple[str, list[tuple[str, str]]]]:
    """Dropdown sections as (section title, [(item title, value), ...])."""
    statuses = [("All", f"{STATUS_PREFIX}{ALL}")]
    statuses += [(s.label, f"{STATUS_PREFIX}{int(s)}") for s in TaskStatus]
    projects_section = [
        ("All Projects", PROJECT_PREFIX),
        ("No Project", f"{PROJECT_PREFIX}{NO_PROJECT}"),
    ]
    projects_section += [(p.name, f"{PROJECT_PREFIX}{p.id}") for p in projects]
    return [("Status", statuses), ("Project", projects_section)]
