# src/tududi_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- checks the account settings are present,
- wires the HTTP-backed repository into AppState.
"""

from __future__ import annotations

import logging

import httpx

from ..api.errors import ConfigError
from ..api.session import SessionClient
from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_repository import TaskRepository

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, transport: httpx.BaseTransport | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Settings and the HTTP transport are injectable for tests. If settings is
    None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    missing = settings.missing() if hasattr(settings, "missing") else []
    if missing:
        raise ConfigError(f"Missing settings: {', '.join(missing)}.")

    sessions = SessionClient.from_settings(settings, transport=transport)
    repo = TaskRepository(sessions)
    logger.info("Using Tududi at %s as %s", sessions.base_url, settings.email)
    return AppState(settings=settings, repo=repo)
