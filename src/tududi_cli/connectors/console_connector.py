# src/tududi_cli/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = "tududi> "


def run_command(state: AppState, line: str) -> str:
    """Run one line through the registry; never raises."""

    def emit(text: str) -> None:
        print(text, flush=True)

    if not line.startswith("/"):
        line = "/" + line

    try:
        reply = command_registry.handle(state, line, emit=emit)
    except Exception:
        logger.exception("Command handler crashed.")
        reply = "Internal error while handling a command."
    return reply or ""


def run_console_loop(state: AppState) -> None:
    logger.info("Console started.")
    print("Type /help for commands, /exit to quit.\n")

    while True:
        try:
            user_input = input(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit", "exit", "quit"):
            logger.info("Console exit command received.")
            break

        print(run_command(state, user_input))
        print()

    logger.info("Console finished.")
