# src/daylist/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_task_list
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: AppState) -> None:
    """
    Interactive list view over the task store.

    The list is re-rendered after any command that changed the collection
    (the store's change notification marks the view dirty).
    """
    logger.info("Console connector started (date=%s).", state.selected_date)
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")
    print(render_task_list(state))

    dirty = False

    def on_change() -> None:
        nonlocal dirty
        dirty = True

    unsubscribe = state.task_store.subscribe(on_change)

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    try:
        while True:
            try:
                user_input = input(f"{state.selected_date.isoformat()} > ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not user_input.startswith("/"):
                # Bare text is a shortcut for /add.
                user_input = f"/add {user_input}"

            dirty = False
            try:
                cmd_response = command_registry.handle(state, user_input, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                cmd_response = "Internal error while handling a command."

            if cmd_response is not None:
                print(cmd_response)

            if dirty:
                print(render_task_list(state))
            print()
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
