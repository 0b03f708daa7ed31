# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tududi_cli.cli.bootstrap import create_initial_state
from tududi_cli.core.state import AppState

from .fakes import FakeTududiServer


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap and repository.

    We intentionally use a SimpleNamespace rather than reading the real
    environment, to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tududi",
        log_level="WARNING",
        data_dir=tmp_path,
        api_url="https://tududi.test",
        email="me@example.com",
        password="secret",
        timeout_seconds=None,
    )


@pytest.fixture()
def server() -> FakeTududiServer:
    return FakeTududiServer()


@pytest.fixture()
def state(settings: SimpleNamespace, server: FakeTududiServer) -> AppState:
    """AppState wired to the HTTP repository, talking to the fake server."""
    return create_initial_state(settings=settings, transport=server.transport())
