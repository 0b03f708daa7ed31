# src/tududi_cli/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the task list, then either runs
the console REPL or, when a command is given on the command line, runs that
single command and exits.
"""

from __future__ import annotations

import contextlib
import locale
import logging
import sys

from ..api.errors import ConfigError, friendly_error_message
from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_command, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_api import load_task_view

logger = logging.getLogger(__name__)

# Commands that do not need the task list loaded first.
_NO_PRELOAD = {"help", "h", "?", "new", "reload", "r", "tags"}


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    # Locale short dates for display.
    with contextlib.suppress(locale.Error):
        locale.setlocale(locale.LC_TIME, "")

    try:
        state = create_initial_state(settings=settings)
    except ConfigError as e:
        print(friendly_error_message(e), file=sys.stderr)
        return 2

    command = " ".join(argv).strip()
    name = command.lstrip("/").split(" ", 1)[0].lower()

    if command:
        if name not in _NO_PRELOAD:
            load_task_view(state)
        print(run_command(state, command))
        return 1 if state.error else 0

    print("Loading tasks...", flush=True)
    load_task_view(state)
    print(run_command(state, "/list"))
    print()
    run_console_loop(state)
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
