# tests/test_task_api.py

from __future__ import annotations

import pytest

from tududi_cli.api.errors import AuthenticationError, UpdateError
from tududi_cli.core.state import AppState
from tududi_cli.tasks import task_api
from tududi_cli.tasks.task_models import Priority, Project, Tag, Task, TaskStatus

from .fakes import FakeTaskRepo, FakeTududiServer


def test_filter_then_complete_end_to_end(state: AppState, server: FakeTududiServer) -> None:
    server.tasks_body = [
        {"id": 1, "uid": "a", "status": 0, "name": "A", "priority": "low"},
        {"id": 2, "uid": "b", "status": 2, "name": "B", "priority": "low"},
    ]

    assert task_api.load_task_view(state)
    assert task_api.set_filter(state, "status-0")
    assert [t.id for t in task_api.visible_tasks(state)] == [1]

    notice = task_api.change_task_status(state, 1, TaskStatus.DONE)

    assert notice.ok
    assert notice.title == "Task marked as completed"
    t1, t2 = state.tasks or []
    assert (t1.id, t1.status, t1.name) == (1, 2, "A")
    assert (t2.id, t2.status, t2.name) == (2, 2, "B")
    # Still filtered on "not started": task 1 left the visible set.
    assert task_api.visible_tasks(state) == []
    # projects, tasks, then the update: one login each.
    assert server.paths == [
        "POST /api/login",
        "GET /api/projects",
        "POST /api/login",
        "GET /api/tasks",
        "POST /api/login",
        "PATCH /api/task/1",
    ]


def test_failed_login_leaves_tasks_unpopulated(state: AppState, server: FakeTududiServer) -> None:
    server.login_status = 401
    server.tasks_body = [{"id": 1, "status": 0, "name": "A"}]

    assert not task_api.load_task_view(state)

    assert state.tasks is None
    assert state.error is not None and "Login failed" in state.error
    assert not state.loading
    assert server.calls("GET", "/api/tasks") == []


def test_projects_failure_does_not_block_tasks(state: AppState, server: FakeTududiServer) -> None:
    server.projects_status = 500
    server.tasks_body = {"data": [{"id": 1, "status": 0, "name": "A", "project_id": 4}]}

    assert task_api.load_task_view(state)

    assert state.error is None
    assert state.projects == []
    (task,) = state.tasks or []
    assert task_api.project_name_for(state, task) is None


def test_tasks_shape_error_is_blocking(state: AppState, server: FakeTududiServer) -> None:
    server.tasks_body = {"unexpected": []}
    assert not task_api.load_task_view(state)
    assert state.tasks is None
    assert state.error == "Invalid tasks response."


def test_rejected_update_changes_nothing(state: AppState, server: FakeTududiServer) -> None:
    server.tasks_body = [{"id": 1, "status": 0, "name": "A"}]
    server.update_status = 500
    task_api.load_task_view(state)

    notice = task_api.change_task_status(state, 1, 2)

    assert not notice.ok
    assert notice.title == "Failed to update task"
    assert notice.message == "Internal Server Error"
    assert (state.tasks or [])[0].status == 0


def test_update_login_failure_is_reported() -> None:
    repo = FakeTaskRepo(tasks=[Task(id=1, uid="a", name="A", status=0, priority="low")])
    repo.fail_update = AuthenticationError("Login failed.", status_code=401, status_text="Unauthorized")
    state = AppState(settings=None, repo=repo)
    task_api.load_task_view(state)

    notice = task_api.change_task_status(state, 1, 2)

    assert not notice.ok
    assert notice.message == "Login failed. (Unauthorized)"
    assert (state.tasks or [])[0].status == 0


def test_toggle_completion_reopens_done_tasks() -> None:
    repo = FakeTaskRepo(
        tasks=[
            Task(id=1, uid="a", name="A", status=2, priority="low"),
            Task(id=2, uid="b", name="B", status=4, priority="low"),
        ]
    )
    state = AppState(settings=None, repo=repo)
    task_api.load_task_view(state)

    assert task_api.toggle_completion(state, 1).title == "Task marked as not started"
    assert task_api.toggle_completion(state, 2).title == "Task marked as completed"
    assert repo.updates == [(1, 0), (2, 2)]


def test_change_status_validates_input() -> None:
    state = AppState(settings=None, repo=FakeTaskRepo(tasks=[Task(id=1, uid="a", name="A", status=0, priority="low")]))
    task_api.load_task_view(state)

    assert task_api.change_task_status(state, 99, 2).title == "Task not found"
    assert task_api.change_task_status(state, 1, 9).title == "Invalid status"


def test_apply_confirmed_status_only_touches_matching_id() -> None:
    tasks = [Task(id=i, uid=str(i), name=str(i), status=0, priority="low") for i in (1, 2, 3)]
    state = AppState(settings=None, repo=FakeTaskRepo(), tasks=tasks)

    task_api.apply_confirmed_status(state, 2, 4)

    assert [t.status for t in tasks] == [0, 4, 0]


def test_draft_defaults_and_submit_discards_it() -> None:
    repo = FakeTaskRepo(projects=[Project(id=3, uid="p3", name="Home")], tags=[Tag(uid="t1", name="home")])
    state = AppState(settings=None, repo=repo)

    draft = task_api.new_draft(state, "Buy milk")
    assert draft.priority is Priority.MEDIUM
    assert draft.status is TaskStatus.NOT_STARTED
    assert draft.note == "" and draft.due_date is None
    assert [t.name for t in state.tags] == ["home"]

    task_api.set_draft_field(state, "priority", "HIGH")
    task_api.set_draft_field(state, "project", "home")
    task_api.set_draft_field(state, "tags", "home, errands")
    task_api.set_draft_field(state, "due", "2026-10-22")
    task_api.set_draft_field(state, "status", "1")

    notice = task_api.submit_draft(state)

    assert notice.ok and notice.title == "Task created successfully"
    assert state.draft is None
    (created,) = repo.created
    assert created.priority is Priority.HIGH
    assert created.project_id == 3
    assert created.tags == ["home", "errands"]
    assert created.status is TaskStatus.IN_PROGRESS
    assert created.due_date is not None and created.due_date.date().isoformat() == "2026-10-22"


def test_failed_submit_keeps_the_draft(state: AppState, server: FakeTududiServer) -> None:
    server.create_status = 500
    task_api.new_draft(state, "Keep me")

    notice = task_api.submit_draft(state)

    assert not notice.ok
    assert state.draft is not None and state.draft.name == "Keep me"


def test_submit_requires_a_name() -> None:
    repo = FakeTaskRepo()
    state = AppState(settings=None, repo=repo)
    task_api.new_draft(state)
    assert task_api.submit_draft(state).title == "Name is required"
    assert repo.created == []


@pytest.mark.parametrize(
    ("field_name", "value"),
    [("priority", "urgent"), ("status", "7"), ("due", "tomorrow"), ("project", "Nowhere"), ("colour", "red")],
)
def test_bad_draft_values_raise_value_error(field_name: str, value: str) -> None:
    state = AppState(settings=None, repo=FakeTaskRepo())
    task_api.new_draft(state)
    with pytest.raises(ValueError):
        task_api.set_draft_field(state, field_name, value)


def test_form_opens_even_when_tags_cannot_load() -> None:
    repo = FakeTaskRepo()

    def broken() -> list[Tag]:
        raise UpdateError("nope")

    repo.list_tags = broken  # type: ignore[method-assign]
    state = AppState(settings=None, repo=repo)
    assert task_api.new_draft(state, "x").name == "x"
    assert state.tags == []
