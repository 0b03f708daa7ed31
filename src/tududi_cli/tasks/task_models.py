# src/tududi_cli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum, StrEnum
from typing import Any

from .task_dates import parse_timestamp


class TaskStatus(IntEnum):
    """
    Tududi task status.

    Closed set on the server side; a value outside it is kept verbatim on the
    Task (as a plain int) and displayed as "Unknown".
    """

    NOT_STARTED = 0
    IN_PROGRESS = 1
    DONE = 2
    ARCHIVED = 3
    WAITING = 4

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def past_tense(self) -> str:
        """Wording used in "Task marked as ..." notices."""
        return _STATUS_NOTICE_WORDS[self]


_STATUS_LABELS = {
    TaskStatus.NOT_STARTED: "Not Started",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
    TaskStatus.ARCHIVED: "Archived",
    TaskStatus.WAITING: "Waiting",
}

_STATUS_NOTICE_WORDS = {
    TaskStatus.NOT_STARTED: "not started",
    TaskStatus.IN_PROGRESS: "in progress",
    TaskStatus.DONE: "completed",
    TaskStatus.ARCHIVED: "archived",
    TaskStatus.WAITING: "waiting",
}


def status_label(status: Any) -> str:
    try:
        return TaskStatus(status).label
    except (ValueError, TypeError):
        return "Unknown"


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: str) -> Priority:
        return cls(raw.strip().lower())


_NUMERIC_PRIORITIES = {0: Priority.LOW, 1: Priority.MEDIUM, 2: Priority.HIGH}


def priority_label(priority: Any) -> str:
    if isinstance(priority, int) and not isinstance(priority, bool):
        p = _NUMERIC_PRIORITIES.get(priority)
        return p.value if p else str(priority)
    return "" if priority is None else str(priority)


@dataclass(slots=True)
class Project:
    id: int
    uid: str | None
    name: str

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Project:
        return cls(id=raw["id"], uid=raw.get("uid"), name=str(raw["name"]))


@dataclass(slots=True)
class Tag:
    uid: str | None
    name: str
    # Server representation, resent untouched on task updates.
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Tag:
        return cls(uid=raw.get("uid"), name=str(raw.get("name") or ""), raw=dict(raw))

    def to_api(self) -> dict[str, Any]:
        if self.raw:
            return dict(self.raw)
        out: dict[str, Any] = {"name": self.name}
        if self.uid:
            out["uid"] = self.uid
        return out


@dataclass(slots=True)
class Task:
    id: int
    uid: str | None
    name: str
    status: int
    priority: Any
    note: str | None = None
    due_date: datetime | None = None
    project_id: int | None = None
    tags: list[Tag] | None = None
    # Due value as the server sent it; resent when it could not be parsed.
    due_raw: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Task:
        tags_raw = raw.get("tags")
        due_raw = raw.get("due_date", raw.get("dueDate"))
        note = raw.get("note")
        tags = None
        if isinstance(tags_raw, list):
            tags = [Tag.from_api(t) for t in tags_raw if isinstance(t, dict)]
        return cls(
            id=raw["id"],
            uid=raw.get("uid"),
            name=str(raw.get("name") or ""),
            status=raw.get("status"),
            priority=raw.get("priority"),
            note=None if note is None else str(note),
            due_date=parse_timestamp(due_raw),
            project_id=raw.get("project_id"),
            tags=tags,
            due_raw=due_raw,
        )

    @property
    def status_text(self) -> str:
        return status_label(self.status)

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    @property
    def tag_names(self) -> list[str]:
        return [t.name for t in self.tags or []]


@dataclass(slots=True)
class TaskDraft:
    """The task being assembled in the creation form."""

    name: str = ""
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    status: TaskStatus = TaskStatus.NOT_STARTED
    note: str = ""
    project_id: int | None = None
    tags: list[str] = field(default_factory=list)
